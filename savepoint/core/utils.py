"""
Shared utilities for the savepoint CLI.
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from typing import Optional

# =============================================================================
# Constants
# =============================================================================

# Directories whose presence marks a project root
PROJECT_MARKERS = [".git", ".savepoint"]

# Version-control metadata directory, never archived or wiped
VCS_DIR_NAME = ".git"

# Dependency directory, never archived or wiped
DEPENDENCY_DIR_NAME = "node_modules"

DEFAULT_PROJECT_NAME = "project"


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return int(time.time() * 1000)


# =============================================================================
# Logging
# =============================================================================


class Logger:
    """Simple colored logger with --no-color support."""

    COLORS = {
        "reset": "\033[0m",
        "red": "\033[91m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
    }

    def __init__(self, use_color: Optional[bool] = None):
        if use_color is None:
            self._use_color = sys.stdout.isatty()
        else:
            self._use_color = use_color

    def set_color(self, use_color: bool) -> None:
        """Set whether to use color output."""
        self._use_color = use_color

    def _color(self, text: str, color: str) -> str:
        if not self._use_color:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def header(self, message: str) -> None:
        """Print a section header."""
        print(f"\n{self._color('===', 'cyan')} {self._color(message, 'bold')} {self._color('===', 'cyan')}")

    def info(self, message: str) -> None:
        """Print an info message."""
        print(f"  {message}")

    def error(self, message: str) -> None:
        """Print an error message."""
        print(f"  {self._color('[ERROR]', 'red')} {message}")

    def dim(self, message: str) -> None:
        """Print a dim/secondary message."""
        print(f"  {self._color(message, 'dim')}")


# Global logger instance
log = Logger()


# =============================================================================
# Path Utilities
# =============================================================================


def get_savepoint_home() -> Path:
    """Get the per-user savepoint directory ($SAVEPOINT_HOME or ~/.savepoint)."""
    override = os.environ.get("SAVEPOINT_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".savepoint"


def get_project_root(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find project root (directory containing one of PROJECT_MARKERS).

    Searches from start_dir (or cwd) upward. Returns None if no
    ancestor carries a marker.
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        if any((current / marker).exists() for marker in PROJECT_MARKERS):
            return current
        if current == current.parent:
            break
        current = current.parent

    return None


def project_name(project_root: Optional[Path]) -> str:
    """Return the last path segment of the project root, or 'project'."""
    if project_root is None:
        return DEFAULT_PROJECT_NAME
    return Path(project_root).name or DEFAULT_PROJECT_NAME
