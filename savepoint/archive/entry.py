"""Archive metadata records for project snapshots."""

from dataclasses import dataclass
from datetime import datetime

ARCHIVE_METADATA_FILE = "archive-metadata.json"
ARCHIVES_DIR_NAME = "archives"
ARCHIVE_SUFFIX = ".tar.gz"


@dataclass
class ArchiveMetadata:
    """A single known archive in a project's archive directory."""

    filename: str  # "<project>-archive-20250101-120000.tar.gz"
    timestamp: int  # Milliseconds since epoch
    description: str = ""

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "filename": self.filename,
            "timestamp": self.timestamp,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ArchiveMetadata":
        """Create an ArchiveMetadata from a dict."""
        return cls(
            filename=data["filename"],
            timestamp=int(data["timestamp"]),
            description=data.get("description", ""),
        )

    @property
    def created(self) -> datetime:
        """Creation time in local time."""
        return datetime.fromtimestamp(self.timestamp / 1000)


def archive_prefix(project: str) -> str:
    """Filename prefix shared by every archive of a project."""
    return f"{project}-archive-"


def archive_filename(project: str, timestamp: int) -> str:
    """Build the archive filename for a project at a timestamp (ms).

    Date fields come from local time, not UTC.
    """
    stamp = datetime.fromtimestamp(timestamp / 1000).strftime("%Y%m%d-%H%M%S")
    return f"{archive_prefix(project)}{stamp}{ARCHIVE_SUFFIX}"
