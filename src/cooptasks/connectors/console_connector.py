# src/cooptasks/connectors/console_connector.py

"""
Console connector.

Reads stdin on a background thread and turns every line into an event, so the
scheduler only ever sees one input: its event queue. The console task that
answers those lines lives here too.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Generator
from datetime import datetime
from typing import Any, TextIO

from ..cli.commands import registry as command_registry
from ..core.state import RuntimeState
from ..tasks.task_api import pull_event
from ..tasks.task_models import Event

logger = logging.getLogger(__name__)

CONSOLE_CLOSED_TAG = "console_closed"


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleReader(threading.Thread):
    """Posts (tag, line) for every stdin line and (CONSOLE_CLOSED_TAG,) at EOF."""

    def __init__(self, post: Any, *, tag: str = "line", stream: TextIO | None = None) -> None:
        super().__init__(name="console-reader", daemon=True)
        self._post = post
        self._tag = tag
        self._stream = stream if stream is not None else sys.stdin
        self._stop_event = threading.Event()

    def run(self) -> None:
        logger.info("Console reader started.")
        try:
            for raw in self._stream:
                if self._stop_event.is_set():
                    break
                self._post(self._tag, raw.rstrip("\r\n"))
        except (OSError, ValueError):
            # ValueError: stream closed under us during shutdown.
            logger.debug("Console stream read failed.", exc_info=True)
        finally:
            if not self._stop_event.is_set():
                self._post(CONSOLE_CLOSED_TAG)
            logger.info("Console reader finished.")

    def stop(self) -> None:
        self._stop_event.set()


def console_task(state: RuntimeState) -> Generator[Any, Event, None]:
    """
    Task body answering console lines.

    Slash commands go through the command registry; /exit (or EOF) stops the
    whole group.
    """
    tag = state.settings.console_tag
    state.emit(f"[{_ts_local()}] Type /help for commands. Use /exit to quit.")

    while True:
        event = yield from pull_event(tag, CONSOLE_CLOSED_TAG)
        if event.tag == CONSOLE_CLOSED_TAG:
            logger.info("Console closed, stopping group.")
            state.group.stop()
            return

        line = str(event.values[0] if event.values else "").strip()
        if not line:
            continue
        state.history.append(line)

        try:
            reply = command_registry.handle(state, line, emit=state.emit)
        except Exception:
            # Reported on the console; the group keeps running.
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = f"Not a command: {line!r}. Use /help to list available commands."
        state.emit(f"[{_ts_local()}] {reply}")
