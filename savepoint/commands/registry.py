"""Slash-command registration, parsing and dispatch."""

from __future__ import annotations

from typing import Optional

from savepoint.commands.load_cmd import load_command
from savepoint.commands.save_cmd import save_command
from savepoint.commands.types import (
    CommandContext,
    CompletionCandidate,
    MessageResult,
    SlashCommand,
    error,
)
from savepoint.core.config import ProjectConfig


class CommandRegistry:
    """Holds slash commands by name and routes input lines to them."""

    def __init__(self) -> None:
        self._commands: dict[str, SlashCommand] = {}

    @classmethod
    def builtin(cls, config: Optional[ProjectConfig]) -> "CommandRegistry":
        """Registry with every built-in command that applies to config."""
        registry = cls()
        for factory in (save_command, load_command):
            command = factory(config)
            if command is not None:
                registry.register(command)
        return registry

    def register(self, command: SlashCommand) -> None:
        if command.name in self._commands:
            raise ValueError(f"Command already registered: /{command.name}")
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[SlashCommand]:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    @staticmethod
    def parse(line: str) -> Optional[tuple[str, str]]:
        """Split '/name rest' into (name, rest). Non-slash input gives None."""
        text = (line or "").strip()
        if not text.startswith("/") or len(text) == 1:
            return None
        name, _, rest = text[1:].partition(" ")
        return name.lower(), rest.strip()

    def dispatch(self, context: CommandContext, line: str) -> MessageResult:
        parsed = self.parse(line)
        if parsed is None:
            return error(f"Not a command: {line.strip()}")
        name, args = parsed
        command = self.get(name)
        if command is None:
            return error(f"Unknown command: /{name}")
        return command.action(context, args)

    def complete(self, context: CommandContext, line: str) -> list[CompletionCandidate]:
        parsed = self.parse(line)
        if parsed is None:
            return []
        name, partial = parsed
        command = self.get(name)
        if command is None or command.completion is None:
            return []
        return command.completion(context, partial)
