"""
/load -- list saved archives, or restore one.

``/load``                      list archives for the current project
``/load <name>.tar.gz --force`` replace the project tree with the archive
``/load <name>.json``          restore a legacy conversation-history dump
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from savepoint.archive.entry import ARCHIVE_SUFFIX
from savepoint.archive.restore import restore_archive
from savepoint.archive.store import get_archives_dir, list_project_archives
from savepoint.commands.types import (
    CommandContext,
    CommandKind,
    CompletionCandidate,
    MessageResult,
    SlashCommand,
    error,
    info,
)
from savepoint.core.config import ProjectConfig

_log = logging.getLogger(__name__)

FORCE_FLAG = "--force"


def parse_load_args(args: str) -> tuple[str, bool]:
    """Split ``args`` into (filename, force).

    ``--force`` may appear anywhere. An unknown ``--flag`` in filename
    position means no filename was given.
    """
    parts = (args or "").split()
    force = FORCE_FLAG in parts
    remaining = [part for part in parts if part != FORCE_FLAG]
    selected = remaining[0] if remaining else ""
    if selected.startswith("--"):
        selected = ""
    return selected, force


def _list_archives(config: ProjectConfig, archives_dir: Path) -> MessageResult:
    try:
        archives = list_project_archives(archives_dir, config.project_root)
    except Exception as e:
        return error(f"Error loading archives: {e}")

    if not archives:
        return info("No saved archives found for the current project.")

    content = "Available archives for the current project:\n\n"
    for archive in archives:
        created = archive.created.strftime("%c")
        suffix = f" - {archive.description}" if archive.description else ""
        content += f"- {archive.filename} (Created: {created}){suffix}\n"
    return info(content)


def _restore_snapshot(config: ProjectConfig, archive_path: Path, selected: str, force: bool) -> MessageResult:
    project_root = config.project_root
    if not project_root:
        return error("Could not determine the project root path.")

    if not force:
        return error(
            f"Loading '{selected}' will overwrite the contents of your current project "
            f"directory ({project_root}). This is a destructive operation. To proceed, "
            f"please run the command again with the '{FORCE_FLAG}' flag "
            f"(e.g., /load {selected} {FORCE_FLAG})."
        )

    restore_archive(archive_path, Path(project_root))
    return info(f"Archive '{selected}' loaded and extracted successfully to {project_root}.")


def _restore_legacy_history(
    context: CommandContext, config: ProjectConfig, file_path: Path, selected: str
) -> MessageResult:
    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object with 'history' and/or 'clientHistory'")

    history = data.get("history")
    client_history = data.get("clientHistory")

    if history:
        if context.ui.load_history is None:
            return error("History loading is not available in the current UI mode.")
        context.ui.load_history(history)

    if client_history and config.chat_client is not None:
        config.chat_client.set_history(client_history)

    return info(f"Archive '{selected}' loaded successfully.")


def load_action(context: CommandContext, args: str) -> MessageResult:
    config = context.services.config
    if config is None:
        return error("Configuration not available.")

    try:
        archives_dir = get_archives_dir(config)
    except OSError as e:
        return error(f"Could not create the archives directory: {e}")
    if archives_dir is None:
        return error("Could not determine the project temp directory path.")

    selected, force = parse_load_args(args)

    if not selected:
        return _list_archives(config, archives_dir)

    file_path = archives_dir / selected
    try:
        if selected.endswith(ARCHIVE_SUFFIX):
            return _restore_snapshot(config, file_path, selected, force)
        return _restore_legacy_history(context, config, file_path, selected)
    except Exception as e:
        _log.debug("load of %s failed", selected, exc_info=True)
        return error(f"Error loading archive {selected}: {e}")


def load_completion(context: CommandContext, partial: str) -> list[CompletionCandidate]:
    """Suggest the current project's archives, newest first."""
    config = context.services.config
    if config is None:
        return []
    try:
        archives_dir = get_archives_dir(config)
        if archives_dir is None:
            return []
        archives = list_project_archives(archives_dir, config.project_root)
    except Exception as e:
        _log.warning("archive completion failed: %s", e)
        return []
    return [
        CompletionCandidate(label=a.filename, value=a.filename, description=a.description)
        for a in archives
    ]


def load_command(config: Optional[ProjectConfig]) -> Optional[SlashCommand]:
    if config is None:
        return None
    return SlashCommand(
        name="load",
        description="List and manage saved archives.",
        kind=CommandKind.BUILT_IN,
        action=load_action,
        completion=load_completion,
    )
