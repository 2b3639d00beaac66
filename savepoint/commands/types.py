"""Types shared by slash commands and the registry that runs them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from savepoint.core.config import ProjectConfig


class CommandKind(Enum):
    BUILT_IN = "built-in"


@dataclass
class HistoryItem:
    """One line of the interactive UI's event log."""

    type: str  # "info", "error", "user"
    text: str


@dataclass
class MessageResult:
    """What a command hands back for display."""

    message_type: str  # "info" | "error"
    content: str
    type: str = field(default="message", init=False)

    @property
    def is_error(self) -> bool:
        return self.message_type == "error"


def info(content: str) -> MessageResult:
    return MessageResult(message_type="info", content=content)


def error(content: str) -> MessageResult:
    return MessageResult(message_type="error", content=content)


@dataclass
class CompletionCandidate:
    label: str
    value: str
    description: str = ""


@dataclass
class CommandServices:
    config: Optional["ProjectConfig"] = None


@dataclass
class UIContext:
    """Hooks into the interactive UI.

    ``load_history`` is None when the current UI mode cannot replace its
    history (e.g. non-interactive runs).
    """

    add_item: Callable[[HistoryItem, int], None]
    load_history: Optional[Callable[[list[Any]], None]] = None


@dataclass
class CommandContext:
    services: CommandServices
    ui: UIContext


CommandAction = Callable[[CommandContext, str], MessageResult]
CommandCompletion = Callable[[CommandContext, str], list[CompletionCandidate]]


@dataclass
class SlashCommand:
    name: str
    description: str
    kind: CommandKind
    action: CommandAction
    completion: Optional[CommandCompletion] = None
