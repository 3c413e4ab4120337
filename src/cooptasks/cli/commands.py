# src/cooptasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Generator
from datetime import datetime
from typing import Any, cast

from ..core.errors import CoopError
from ..core.state import RuntimeState
from ..img.x6 import X6Image
from ..tasks.task_api import sleep
from ..tasks.task_models import Event

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[RuntimeState, list[str]], str]
CommandHandler3 = Callable[[RuntimeState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console task (/help, /status, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: RuntimeState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def countdown_task(state: RuntimeState, number: int, seconds: float) -> Generator[Any, Event, int]:
    """Sleep `seconds`, then announce it. Spawned by /spawn."""
    yield from sleep(state.events, seconds, timer_tag=state.settings.timer_tag)
    state.emit(f"[{_ts_local()}] Countdown #{number} finished after {seconds:g}s.")
    return number


def cmd_help(state: RuntimeState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: RuntimeState, args: list[str]) -> str:
    group = state.group
    snap = group.snapshot()
    running = ", ".join(snap["running"]) or "-"
    return (
        "Status:\n"
        f"  Group: {group.name} (running={'yes' if group.is_running else 'no'})\n"
        f"  Tasks running: {group.running_count} [{running}]\n"
        f"  Tasks pending: {group.pending_count}\n"
        f"  Queued events: {state.events.pending()}\n"
        f"  Lines received: {len(state.history)}"
    )


def cmd_spawn(
    state: RuntimeState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /spawn          -> countdown of 1 second
    /spawn <secs>   -> countdown of <secs> seconds
    """
    seconds = 1.0
    if args:
        try:
            seconds = float(args[0])
        except ValueError:
            return "Usage: /spawn [seconds]"
        if seconds < 0:
            return "Usage: /spawn [seconds] (seconds must be >= 0)"

    state.countdowns_started += 1
    number = state.countdowns_started
    state.group.add(countdown_task, state, number, seconds, name=f"countdown-{number}")
    logger.debug("Countdown %d spawned (%.3fs)", number, seconds)
    return f"Countdown #{number} started ({seconds:g}s)."


def cmd_show(
    state: RuntimeState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """/show <path> -> render an x6 image on the terminal"""
    if not args:
        return "Usage: /show <path-to-x6-image>"

    path = " ".join(args)
    try:
        image = X6Image.from_file(path)
    except CoopError as e:
        return f"Cannot show {path}: {e.message}"

    if emit:
        emit(f"[{_ts_local()}] {path}: {image.char_width}x{image.char_height} cells")
    buffer = image.to_buffer()
    for dy in range(1, image.char_height + 1):
        text, fg, bg = buffer.row(dy)
        state.terminal.blit(text, fg, bg)
        state.terminal.newline()
    return f"Shown {path}."


def cmd_exit(state: RuntimeState, args: list[str]) -> str:
    logger.info("Console exit command received.")
    state.group.stop()
    return "Stopping."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task group status.")
registry.register("spawn", cmd_spawn, help_text="Start a countdown task: /spawn [seconds].")
registry.register("show", cmd_show, help_text="Render an x6 image: /show <path>.")
registry.register("exit", cmd_exit, help_text="Stop the task group and quit.", aliases=["quit"])
