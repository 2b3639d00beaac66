"""
Project context and user settings.

Settings live in ``<savepoint home>/settings.yaml``::

    temp_root: ~/scratch/savepoint   # where per-project temp dirs are created
    color: false                     # default for console color output

Every key is optional and a missing file means defaults throughout.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml

from savepoint.core.utils import get_project_root, get_savepoint_home

if TYPE_CHECKING:
    from savepoint.session import ChatClient

SETTINGS_FILE_NAME = "settings.yaml"


# =============================================================================
# Settings Loading (cached)
# =============================================================================


def settings_path() -> Path:
    """Return the absolute path to settings.yaml."""
    return get_savepoint_home() / SETTINGS_FILE_NAME


@lru_cache(maxsize=None)
def _load_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def load_settings(path: Optional[Path] = None) -> dict[str, Any]:
    """Load and return the parsed settings dictionary.

    Result is cached per path for the lifetime of the process.
    """
    return dict(_load_settings_file(path or settings_path()))


def _reset_settings_cache() -> None:
    """Reset the settings cache (for testing)."""
    _load_settings_file.cache_clear()


def get_temp_root(settings: Optional[dict[str, Any]] = None) -> Path:
    """Directory holding one temp-data directory per project."""
    if settings is None:
        settings = load_settings()
    configured = settings.get("temp_root")
    if configured:
        return Path(str(configured)).expanduser()
    return get_savepoint_home() / "tmp"


def project_temp_dir_for(project_root: Path, temp_root: Path) -> Path:
    """Per-project temp-data directory, keyed by a hash of the root path."""
    digest = hashlib.sha256(str(project_root).encode("utf-8")).hexdigest()
    return temp_root / digest


# =============================================================================
# Project Context
# =============================================================================


@dataclass
class ProjectConfig:
    """What the commands know about the project they run in."""

    project_root: Optional[Path]
    project_temp_dir: Optional[Path]
    chat_client: Optional["ChatClient"] = None

    @classmethod
    def discover(
        cls,
        start_dir: Optional[Path] = None,
        chat_client: Optional["ChatClient"] = None,
        settings: Optional[dict[str, Any]] = None,
    ) -> "ProjectConfig":
        """Build a config for the project containing start_dir (or cwd).

        Falls back to start_dir itself when no marker directory is found.
        """
        start = (start_dir or Path.cwd()).resolve()
        root = get_project_root(start) or start
        temp_dir = project_temp_dir_for(root, get_temp_root(settings))
        return cls(project_root=root, project_temp_dir=temp_dir, chat_client=chat_client)
