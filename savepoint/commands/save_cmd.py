"""
/save -- snapshot the project directory into a compressed archive.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from savepoint.archive.codec import create_archive, prefix_exclude_filter
from savepoint.archive.entry import ARCHIVES_DIR_NAME, ArchiveMetadata, archive_filename
from savepoint.archive.store import get_archives_dir, read_archive_metadata, write_archive_metadata
from savepoint.commands.types import (
    CommandContext,
    CommandKind,
    CompletionCandidate,
    HistoryItem,
    MessageResult,
    SlashCommand,
    error,
    info,
)
from savepoint.core.config import ProjectConfig
from savepoint.core.utils import DEPENDENCY_DIR_NAME, VCS_DIR_NAME, now_ms, project_name

_log = logging.getLogger(__name__)

DEFAULT_EXCLUDES = [DEPENDENCY_DIR_NAME, VCS_DIR_NAME, ARCHIVES_DIR_NAME]


def build_excludes(existing: list[ArchiveMetadata]) -> list[str]:
    """Default excludes plus every previously saved archive, deduplicated."""
    excludes: list[str] = []
    for name in DEFAULT_EXCLUDES + [record.filename for record in existing]:
        if name not in excludes:
            excludes.append(name)
    return excludes


def save_action(context: CommandContext, args: str) -> MessageResult:
    """Create an archive of the project root; ``args`` is the description."""
    config = context.services.config
    add_item = context.ui.add_item

    if config is None:
        return error("Configuration not available.")

    try:
        archives_dir = get_archives_dir(config)
    except OSError as e:
        return error(f"Could not create the archives directory: {e}")
    if archives_dir is None:
        return error("Could not determine the project temp directory path.")

    description = (args or "").strip()

    try:
        timestamp = now_ms()
        filename = archive_filename(project_name(config.project_root), timestamp)
        archive_path = archives_dir / filename

        add_item(HistoryItem(type="info", text=f"Creating archive: {archive_path}"), timestamp)

        existing = read_archive_metadata(archives_dir)
        excludes = build_excludes(existing)

        source_root = Path(config.project_root) if config.project_root else Path.cwd()
        create_archive(
            archive_path,
            cwd=source_root,
            paths=["."],
            include=prefix_exclude_filter(excludes),
        )

        existing.append(ArchiveMetadata(filename=filename, timestamp=timestamp, description=description))
        write_archive_metadata(archives_dir, existing)

        add_item(HistoryItem(type="info", text=f"Archive created successfully: {archive_path}"), timestamp)
    except Exception as e:
        _log.debug("save failed", exc_info=True)
        return error(f"An unexpected error occurred: {e}")

    suffix = f' with description: "{description}"' if description else ""
    return info(f"Archive created at: {archive_path}{suffix}")


def save_completion(context: CommandContext, partial: str) -> list[CompletionCandidate]:
    # Free-text description; nothing to suggest
    return []


def save_command(config: Optional[ProjectConfig]) -> Optional[SlashCommand]:
    if config is None:
        return None
    return SlashCommand(
        name="save",
        description="Create an archive file of the current directory.",
        kind=CommandKind.BUILT_IN,
        action=save_action,
        completion=save_completion,
    )
