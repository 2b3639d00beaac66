"""
savepoint - project snapshot commands for interactive CLI sessions.

Usage:
    python -m savepoint <command> [options]

Commands:
    save     Create an archive of the current project
    load     List archives, or restore one
    shell    Interactive prompt accepting /save and /load
"""

from .cli import __version__, main

__all__ = ["__version__", "main"]
