"""
Main CLI for the savepoint tool.

Runs the /save and /load slash commands once from the command line, or
starts an interactive shell that accepts them.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from savepoint.commands.registry import CommandRegistry
from savepoint.commands.types import CommandContext, CommandServices
from savepoint.core.config import ProjectConfig, load_settings
from savepoint.core.utils import log
from savepoint.session import ChatClient, InteractiveUI
from savepoint.shell import print_result, run_shell


# =============================================================================
# Version
# =============================================================================

__version__ = "0.1.0"


# =============================================================================
# Argument Parsing
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""

    parser = argparse.ArgumentParser(
        prog="savepoint",
        description="Snapshot and restore project directories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  save     Create an archive of the current project
  load     List archives, or restore one
  shell    Interactive prompt accepting /save and /load

Examples:
  savepoint save before refactor              # Archive with a description
  savepoint load                              # List archives for this project
  savepoint load myproj-archive-20250101-120000.tar.gz --force
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Project directory (default: detected from the current directory)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- save ---
    save_parser = subparsers.add_parser(
        "save",
        help="Create an archive of the current project",
    )
    save_parser.add_argument(
        "description",
        nargs="*",
        help="Free-text description stored with the archive",
    )

    # --- load ---
    load_parser = subparsers.add_parser(
        "load",
        help="List archives, or restore one",
    )
    load_parser.add_argument(
        "filename",
        nargs="?",
        default="",
        help="Archive to restore (omit to list)",
    )
    load_parser.add_argument(
        "--force",
        action="store_true",
        help="Confirm overwriting the project directory",
    )

    # --- shell ---
    subparsers.add_parser(
        "shell",
        help="Interactive prompt accepting /save and /load",
    )

    return parser


# =============================================================================
# Main Entry Point
# =============================================================================


def _slash_line(args: argparse.Namespace) -> str:
    if args.command == "save":
        return " ".join(["/save", *args.description]).strip()
    parts = ["/load"]
    if args.filename:
        parts.append(args.filename)
    if args.force:
        parts.append("--force")
    return " ".join(parts)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except (OSError, ValueError) as e:
        log.error(f"Invalid settings: {e}")
        return 1

    if args.no_color or settings.get("color") is False:
        log.set_color(False)

    # No command specified
    if not args.command:
        parser.print_help()
        return 0

    config = ProjectConfig.discover(args.project_root, chat_client=ChatClient(), settings=settings)

    if args.command == "shell":
        return run_shell(config)

    # One-shot runs have no UI history to replace
    ui = InteractiveUI(echo=lambda item: log.dim(item.text), history_enabled=False)
    registry = CommandRegistry.builtin(config)
    context = CommandContext(services=CommandServices(config=config), ui=ui.context())

    result = registry.dispatch(context, _slash_line(args))
    print_result(result)
    return 1 if result.is_error else 0
