"""
Shared pytest fixtures for savepoint tests.

Provides fixtures for creating isolated project trees, temp-data
directories and command contexts that never touch the real home
directory.

Test Tier Markers:
  @pytest.mark.evergreen - Tests that always run, never skip (production tests)
"""

from __future__ import annotations

import io
from contextlib import redirect_stdout
from datetime import datetime
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import Mock

import pytest

from savepoint.archive.entry import ArchiveMetadata
from savepoint.archive.store import write_archive_metadata
from savepoint.commands.types import CommandContext, CommandServices, UIContext
from savepoint.core.config import ProjectConfig, _reset_settings_cache


# =============================================================================
# Test Data Constants
# =============================================================================

PROJECT_NAME = "test-project"

# 2025-01-01T12:00:00 local time, in milliseconds
FIXED_TIMESTAMP = int(datetime(2025, 1, 1, 12, 0, 0).timestamp() * 1000)

# Format: (filename, timestamp, description)
MULTI_ARCHIVE_TEST_DATA: list[tuple[str, int, str]] = [
    ("test-project-archive-20250101-100000.tar.gz", 1735725600000, "first"),
    ("other-project-archive-20250101-110000.tar.gz", 1735729200000, "not ours"),
    ("test-project-archive-20250103-100000.tar.gz", 1735898400000, ""),
    ("test-project-archive-20250102-100000.tar.gz", 1735812000000, "second"),
]


# =============================================================================
# Factories
# =============================================================================


def _populate_project(root: Path) -> Path:
    """Create a small project tree with files that must and must not be archived."""
    (root / "src").mkdir(parents=True)
    (root / "README.md").write_text("# test project\n")
    (root / "src" / "app.py").write_text("print('hello')\n")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "index.js").write_text("module.exports = {};\n")
    return root


def _create_records(archives_dir: Path, data: list[tuple[str, int, str]]) -> list[ArchiveMetadata]:
    records = [ArchiveMetadata(filename=f, timestamp=t, description=d) for f, t, d in data]
    write_archive_metadata(archives_dir, records)
    return records


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test tiers."""
    config.addinivalue_line(
        "markers",
        "evergreen: tests that always run, never skip (production tests)"
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point SAVEPOINT_HOME at a temp dir and clear cached settings."""
    home = tmp_path / "savepoint-home"
    monkeypatch.setenv("SAVEPOINT_HOME", str(home))
    _reset_settings_cache()
    yield home
    _reset_settings_cache()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A populated project directory named test-project."""
    return _populate_project(tmp_path / PROJECT_NAME)


@pytest.fixture
def config(project_root: Path, tmp_path: Path) -> ProjectConfig:
    """Project config with a temp dir outside the project and a mock chat client."""
    return ProjectConfig(
        project_root=project_root,
        project_temp_dir=tmp_path / "temp",
        chat_client=Mock(),
    )


@pytest.fixture
def archives_dir(config: ProjectConfig) -> Path:
    path = Path(config.project_temp_dir) / "archives"
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def ui() -> UIContext:
    """UI context whose sinks are mocks."""
    return UIContext(add_item=Mock(), load_history=Mock())


@pytest.fixture
def context(config: ProjectConfig, ui: UIContext) -> CommandContext:
    return CommandContext(services=CommandServices(config=config), ui=ui)


@pytest.fixture
def archives_with_records(archives_dir: Path) -> tuple[Path, list[ArchiveMetadata]]:
    """Metadata store holding MULTI_ARCHIVE_TEST_DATA, in that (unsorted) order."""
    return archives_dir, _create_records(archives_dir, MULTI_ARCHIVE_TEST_DATA)


@pytest.fixture
def fixed_clock(monkeypatch: pytest.MonkeyPatch) -> int:
    """Freeze the save command's clock at FIXED_TIMESTAMP."""
    from savepoint.commands import save_cmd
    monkeypatch.setattr(save_cmd, "now_ms", lambda: FIXED_TIMESTAMP)
    return FIXED_TIMESTAMP


@pytest.fixture
def staging_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect tempfile's default dir so restore staging dirs can be inspected."""
    import tempfile
    staging = tmp_path / "staging"
    staging.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(staging))
    return staging


class CLIRunner:
    """Helper class to run CLI commands in-process with captured output."""

    def __init__(self, project_root: Path, monkeypatch: pytest.MonkeyPatch):
        self.project_root = project_root
        self.monkeypatch = monkeypatch

    def run(self, args: list[str], stdin_lines: list[str] | None = None) -> "CLIResult":
        """Run CLI with given args (without 'savepoint' prefix) against project_root.

        stdin_lines feeds the interactive shell; EOF follows the last line.
        """
        from savepoint.cli import main

        if stdin_lines is not None:
            lines = iter(stdin_lines)

            def _input(_prompt: str = "") -> str:
                try:
                    return next(lines)
                except StopIteration:
                    raise EOFError

            self.monkeypatch.setattr("builtins.input", _input)

        stdout_capture = io.StringIO()
        argv = ["--no-color", "--project-root", str(self.project_root), *args]

        with redirect_stdout(stdout_capture):
            try:
                returncode = main(argv)
            except SystemExit as e:
                returncode = e.code if isinstance(e.code, int) else 1

        return CLIResult(
            returncode=returncode or 0,
            stdout=stdout_capture.getvalue(),
        )


class CLIResult:
    """Result of running a CLI command."""

    def __init__(self, returncode: int, stdout: str):
        self.returncode = returncode
        self.stdout = stdout

    def __repr__(self) -> str:
        return f"CLIResult(returncode={self.returncode}, stdout={self.stdout[:100]!r}...)"


@pytest.fixture
def cli_runner(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> CLIRunner:
    """CLI runner bound to the populated test project."""
    return CLIRunner(project_root, monkeypatch)


@pytest.fixture
def make_context(ui: UIContext) -> Callable[[ProjectConfig | None], CommandContext]:
    """Build a context around an arbitrary (possibly missing) config."""
    def _make(cfg: ProjectConfig | None) -> CommandContext:
        return CommandContext(services=CommandServices(config=cfg), ui=ui)
    return _make
