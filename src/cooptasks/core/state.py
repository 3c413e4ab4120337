# src/cooptasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from ..display.terminal import AnsiTerminal
from ..events.sources import QueueEventSource
from ..tasks.task_group import TaskGroup


@dataclass
class RuntimeState:
    # Store Settings on the state for easy access in commands and tasks.
    settings: Any

    events: QueueEventSource
    group: TaskGroup
    terminal: AnsiTerminal

    # Lines printed by tasks go through here (tests swap it for a list.append).
    emit: Callable[[str], None] = print
    countdowns_started: int = 0
    history: list[str] = field(default_factory=list)
