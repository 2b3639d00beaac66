"""tar+gzip creation and extraction for project snapshots."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path
from typing import Callable, Iterable, Optional

_log = logging.getLogger(__name__)

# Receives the member path relative to the archive root, without a leading "./"
EntryFilter = Callable[[str], bool]


def normalize_member_path(path: str) -> str:
    """Strip a leading './' so filters see plain relative paths."""
    return path[2:] if path.startswith("./") else path


def prefix_exclude_filter(excludes: Iterable[str]) -> EntryFilter:
    """Build a filter rejecting every path that starts with an excluded name.

    This is a plain string-prefix test, so excluding ``archives`` also
    drops ``archives2/`` and ``archives-backup.txt``.
    """
    excludes = list(excludes)

    def _include(path: str) -> bool:
        normalized = normalize_member_path(path)
        return not any(normalized.startswith(exclude) for exclude in excludes)

    return _include


def _expand_paths(cwd: Path, paths: Iterable[str]) -> list[str]:
    # "." expands to its children so member names carry no "./" prefix
    expanded: list[str] = []
    for path in paths:
        if path in (".", "./"):
            expanded.extend(sorted(child.name for child in cwd.iterdir()))
        else:
            expanded.append(normalize_member_path(path))
    return expanded


def create_archive(
    file: Path,
    cwd: Path,
    paths: Iterable[str] = (".",),
    include: Optional[EntryFilter] = None,
    gzip: bool = True,
) -> int:
    """Write a tar archive of ``paths`` (relative to cwd) to ``file``.

    ``include`` is consulted for every entry, directories included; a
    rejected directory is skipped with everything beneath it. Returns the
    number of members written.
    """
    cwd = Path(cwd)
    mode = "w:gz" if gzip else "w"
    count = 0

    def _tar_filter(tarinfo: tarfile.TarInfo) -> Optional[tarfile.TarInfo]:
        nonlocal count
        tarinfo.name = normalize_member_path(tarinfo.name)
        if include is not None and not include(tarinfo.name):
            return None
        count += 1
        return tarinfo

    with tarfile.open(file, mode) as tar:
        for name in _expand_paths(cwd, paths):
            tar.add(cwd / name, arcname=name, filter=_tar_filter)

    _log.debug("Archived %d entries from %s into %s", count, cwd, file)
    return count


def extract_archive(file: Path, cwd: Path) -> list[str]:
    """Extract ``file`` into ``cwd``. Returns the member names.

    Uses tarfile's "tar" filter: member paths are confined to cwd, but
    symlink targets are kept as stored, so absolute links such as a
    virtualenv's interpreter survive a round trip.
    """
    with tarfile.open(file, "r:*") as tar:
        names = tar.getnames()
        tar.extractall(path=cwd, filter="tar")
    _log.debug("Extracted %d entries from %s into %s", len(names), file, cwd)
    return names
