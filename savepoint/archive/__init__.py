"""Archive module for project snapshots."""

from .entry import (
    ARCHIVE_METADATA_FILE,
    ARCHIVES_DIR_NAME,
    ARCHIVE_SUFFIX,
    ArchiveMetadata,
    archive_filename,
    archive_prefix,
)
from .store import (
    get_archives_dir,
    read_archive_metadata,
    write_archive_metadata,
    append_archive_metadata,
    list_project_archives,
)
from .codec import (
    create_archive,
    extract_archive,
    prefix_exclude_filter,
)
from .restore import (
    KEEP_ON_RESTORE,
    clear_project_root,
    move_into,
    restore_archive,
)

__all__ = [
    # Entry types
    "ARCHIVE_METADATA_FILE",
    "ARCHIVES_DIR_NAME",
    "ARCHIVE_SUFFIX",
    "ArchiveMetadata",
    "archive_filename",
    "archive_prefix",
    # Metadata store
    "get_archives_dir",
    "read_archive_metadata",
    "write_archive_metadata",
    "append_archive_metadata",
    "list_project_archives",
    # Codec
    "create_archive",
    "extract_archive",
    "prefix_exclude_filter",
    # Restore
    "KEEP_ON_RESTORE",
    "clear_project_root",
    "move_into",
    "restore_archive",
]
