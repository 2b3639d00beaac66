"""
In-process stand-ins for the chat client and the interactive UI.

``ChatClient`` holds the conversation history that legacy JSON dumps
restore via ``clientHistory``; ``InteractiveUI`` keeps the timestamped
event log that commands append progress to and that ``history`` dumps
replace.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Optional

from savepoint.commands.types import HistoryItem, UIContext
from savepoint.core.utils import now_ms


class ChatClient:
    """Conversation history owned by the chat session."""

    def __init__(self, history: Optional[list[Any]] = None):
        self._history: Any = copy.deepcopy(history) if history else []

    def get_history(self) -> Any:
        return copy.deepcopy(self._history)

    def set_history(self, history: Any) -> None:
        self._history = copy.deepcopy(history)

    def add_message(self, role: str, text: str) -> None:
        self._history.append({"role": role, "parts": [{"text": text}]})


class InteractiveUI:
    """Append-only event log shown by the shell."""

    def __init__(
        self,
        echo: Optional[Callable[[HistoryItem], None]] = None,
        history_enabled: bool = True,
    ):
        self.items: list[tuple[int, HistoryItem]] = []
        self.echo = echo
        self.history_enabled = history_enabled

    def add_item(self, item: HistoryItem, timestamp: Optional[int] = None) -> None:
        self.items.append((timestamp if timestamp is not None else now_ms(), item))
        if self.echo is not None:
            self.echo(item)

    def load_history(self, history: list[Any]) -> None:
        """Replace the event log with items from a saved dump.

        Entries may be HistoryItem instances or ``{"type", "text"}`` dicts.
        """
        loaded_at = now_ms()
        self.items = [(loaded_at, _coerce_item(entry)) for entry in history]

    def context(self) -> UIContext:
        return UIContext(
            add_item=self.add_item,
            load_history=self.load_history if self.history_enabled else None,
        )


def _coerce_item(entry: Any) -> HistoryItem:
    if isinstance(entry, HistoryItem):
        return entry
    if isinstance(entry, dict):
        return HistoryItem(type=str(entry.get("type", "info")), text=str(entry.get("text", "")))
    return HistoryItem(type="info", text=str(entry))
