# src/cooptasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task group depends on Protocols instead of concrete implementations.
This keeps the host side (queues, consoles, timers, terminals) swappable and
lets tests drive a scheduler with synthetic event sequences.
"""

from collections.abc import Callable, Generator
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Event

TaskBody = Generator[Any, "Event", Any]
# A task function returns either a TaskBody (generator) or a plain value.
TaskFunction = Callable[..., Any]


class EventSource(Protocol):
    """Blocking provider of the next host event."""

    def next_event(self) -> Event: ...


class TimerService(Protocol):
    """
    Schedules timer events.

    start_timer returns an id; when the timer fires, the source delivers
    ("timer", id) like any other event.
    """

    def start_timer(self, seconds: float) -> int: ...


class Redirect(Protocol):
    """
    Display target a Buffer can be printed to.

    blit() receives one row: characters plus fg/bg colours encoded as blit digits
    (one hex digit per cell, see display.colors).
    """

    def set_cursor_pos(self, x: int, y: int) -> None: ...

    def blit(self, text: str, fg: str, bg: str) -> None: ...
