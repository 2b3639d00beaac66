"""Slash commands: /save and /load."""

from .types import (
    CommandContext,
    CommandKind,
    CommandServices,
    CompletionCandidate,
    HistoryItem,
    MessageResult,
    SlashCommand,
    UIContext,
)
from .save_cmd import save_action, save_command
from .load_cmd import load_action, load_command, load_completion, parse_load_args
from .registry import CommandRegistry

__all__ = [
    # Types
    "CommandContext",
    "CommandKind",
    "CommandServices",
    "CompletionCandidate",
    "HistoryItem",
    "MessageResult",
    "SlashCommand",
    "UIContext",
    # Commands
    "save_action",
    "save_command",
    "load_action",
    "load_command",
    "load_completion",
    "parse_load_args",
    # Registry
    "CommandRegistry",
]
