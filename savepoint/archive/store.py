"""
Archive directory resolution and the metadata sidecar.

The sidecar (``archive-metadata.json``) is a flat JSON array of
``{filename, timestamp, description}`` records, appended in creation
order. It is read and rewritten whole on every access; nothing is cached
between calls and no lock is taken, so two concurrent writers can lose
each other's records.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from savepoint.archive.entry import (
    ARCHIVE_METADATA_FILE,
    ARCHIVES_DIR_NAME,
    ArchiveMetadata,
    archive_prefix,
)
from savepoint.core.config import ProjectConfig
from savepoint.core.utils import project_name

_log = logging.getLogger(__name__)


def get_archives_dir(config: Optional[ProjectConfig]) -> Optional[Path]:
    """Return the archives directory for a project, creating it if needed.

    Returns None when the project has no temp directory; callers report
    that to the user instead of failing.
    """
    if config is None or not config.project_temp_dir:
        return None
    archives_dir = Path(config.project_temp_dir) / ARCHIVES_DIR_NAME
    archives_dir.mkdir(parents=True, exist_ok=True)
    return archives_dir


def metadata_path(archives_dir: Path) -> Path:
    return archives_dir / ARCHIVE_METADATA_FILE


def read_archive_metadata(archives_dir: Path) -> list[ArchiveMetadata]:
    """Load every record from the sidecar.

    A missing sidecar is the first-use case and yields an empty list.
    Any other failure (permissions, malformed JSON) propagates.
    """
    path = metadata_path(archives_dir)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return []
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of archive records")
    return [ArchiveMetadata.from_dict(item) for item in data]


def write_archive_metadata(archives_dir: Path, records: list[ArchiveMetadata]) -> None:
    """Overwrite the sidecar with the full record list (pretty-printed)."""
    path = metadata_path(archives_dir)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([record.to_dict() for record in records], f, indent=2)
    _log.debug("Wrote %d archive records to %s", len(records), path)


def append_archive_metadata(archives_dir: Path, record: ArchiveMetadata) -> list[ArchiveMetadata]:
    """Read, append one record, write back. Returns the stored list."""
    records = read_archive_metadata(archives_dir)
    records.append(record)
    write_archive_metadata(archives_dir, records)
    return records


def list_project_archives(archives_dir: Path, project_root: Optional[Path]) -> list[ArchiveMetadata]:
    """Records belonging to the current project, newest first."""
    prefix = archive_prefix(project_name(project_root))
    records = [r for r in read_archive_metadata(archives_dir) if r.filename.startswith(prefix)]
    records.sort(key=lambda r: r.timestamp, reverse=True)
    return records
