"""
Destructive restore of a project tree from a snapshot archive.

The sequence is staged so the live tree is only touched once the archive
has extracted cleanly:

1. extract into a fresh temporary directory
2. remove every project-root entry not in the keep-list
3. move each extracted top-level entry into the project root

The temporary directory is removed on every exit path. Nothing is rolled
back if step 2 or 3 fails part way.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

from savepoint.archive.codec import extract_archive
from savepoint.archive.entry import ARCHIVES_DIR_NAME
from savepoint.core.utils import DEPENDENCY_DIR_NAME, VCS_DIR_NAME

_log = logging.getLogger(__name__)

# Project-root entries that survive a restore
KEEP_ON_RESTORE = (VCS_DIR_NAME, DEPENDENCY_DIR_NAME, ARCHIVES_DIR_NAME)

STAGING_PREFIX = "savepoint-load-"


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


@contextmanager
def staging_directory(staging_root: Optional[Path] = None) -> Iterator[Path]:
    """Yield a fresh temporary directory, removed on exit."""
    with tempfile.TemporaryDirectory(prefix=STAGING_PREFIX, dir=staging_root) as tmpdir:
        yield Path(tmpdir)


def clear_project_root(project_root: Path, keep: Iterable[str] = KEEP_ON_RESTORE) -> list[str]:
    """Delete every top-level entry of project_root not named in keep."""
    keep = set(keep)
    removed: list[str] = []
    for item in sorted(project_root.iterdir()):
        if item.name in keep:
            continue
        _remove_path(item)
        removed.append(item.name)
    _log.debug("Removed %d entries from %s", len(removed), project_root)
    return removed


def move_into(source_dir: Path, project_root: Path) -> list[str]:
    """Move each top-level entry of source_dir into project_root.

    A directory landing on an existing directory is merged into it;
    anything else replaces what was there.
    """
    moved: list[str] = []
    for item in sorted(source_dir.iterdir()):
        destination = project_root / item.name
        if item.is_dir() and not item.is_symlink() and destination.is_dir() and not destination.is_symlink():
            shutil.copytree(item, destination, symlinks=True, dirs_exist_ok=True)
            shutil.rmtree(item)
        else:
            if destination.exists() or destination.is_symlink():
                _remove_path(destination)
            shutil.move(str(item), str(destination))
        moved.append(item.name)
    return moved


def restore_archive(
    archive_path: Path,
    project_root: Path,
    keep: Iterable[str] = KEEP_ON_RESTORE,
    staging_root: Optional[Path] = None,
) -> list[str]:
    """Replace the contents of project_root with archive_path's contents.

    Returns the top-level names restored.
    """
    with staging_directory(staging_root) as staging:
        extract_archive(archive_path, staging)
        clear_project_root(project_root, keep)
        restored = move_into(staging, project_root)
    _log.debug("Restored %s into %s (%d entries)", archive_path, project_root, len(restored))
    return restored
