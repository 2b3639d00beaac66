"""
savepoint.core - Foundation layer for the savepoint CLI.

Exports logging, path utilities and the project context.
"""

# Utils
from savepoint.core.utils import (
    # Logging
    log,
    Logger,
    # Constants
    PROJECT_MARKERS,
    VCS_DIR_NAME,
    DEPENDENCY_DIR_NAME,
    DEFAULT_PROJECT_NAME,
    # Time
    now_ms,
    # Path utilities
    get_savepoint_home,
    get_project_root,
    project_name,
)

# Configuration
from savepoint.core.config import (
    ProjectConfig,
    load_settings,
    settings_path,
    get_temp_root,
    project_temp_dir_for,
)

__all__ = [
    # Logging
    "log",
    "Logger",
    # Constants
    "PROJECT_MARKERS",
    "VCS_DIR_NAME",
    "DEPENDENCY_DIR_NAME",
    "DEFAULT_PROJECT_NAME",
    # Time
    "now_ms",
    # Path utilities
    "get_savepoint_home",
    "get_project_root",
    "project_name",
    # Configuration
    "ProjectConfig",
    "load_settings",
    "settings_path",
    "get_temp_root",
    "project_temp_dir_for",
]
