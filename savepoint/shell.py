"""Interactive slash-command loop."""

from __future__ import annotations

from typing import Callable, Optional

from savepoint.commands.registry import CommandRegistry
from savepoint.commands.types import CommandContext, CommandServices, HistoryItem, MessageResult
from savepoint.core.config import ProjectConfig
from savepoint.core.utils import log
from savepoint.session import ChatClient, InteractiveUI

EXIT_COMMANDS = {"/quit", "/exit", "/q"}


def print_result(result: MessageResult) -> None:
    """Show a command result on the console."""
    lines = result.content.rstrip("\n").splitlines() or [""]
    emit = log.error if result.is_error else log.info
    emit(lines[0])
    for line in lines[1:]:
        log.info(line)


def _echo_item(item: HistoryItem) -> None:
    if item.type != "user":
        log.dim(item.text)


def run_shell(
    config: ProjectConfig,
    input_fn: Optional[Callable[[str], str]] = None,
    ui: Optional[InteractiveUI] = None,
) -> int:
    """Read lines until /quit or EOF. Returns an exit code."""
    input_fn = input_fn or input
    if config.chat_client is None:
        config.chat_client = ChatClient()
    ui = ui or InteractiveUI(echo=_echo_item)
    registry = CommandRegistry.builtin(config)
    context = CommandContext(services=CommandServices(config=config), ui=ui.context())

    log.header(f"savepoint shell ({config.project_root})")
    log.dim(f"Commands: {', '.join('/' + name for name in registry.names())}, /quit")

    while True:
        try:
            line = input_fn("> ")
        except (EOFError, KeyboardInterrupt):
            break

        text = line.strip()
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break

        if registry.parse(text) is None:
            config.chat_client.add_message("user", text)
            ui.add_item(HistoryItem(type="user", text=text))
            continue

        print_result(registry.dispatch(context, text))

    return 0
