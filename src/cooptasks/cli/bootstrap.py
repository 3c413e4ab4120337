# src/cooptasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the event queue, the task group and the terminal into RuntimeState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import RuntimeState
from ..display.terminal import AnsiTerminal
from ..events.sources import QueueEventSource
from ..tasks.task_group import TaskGroup

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_runtime(*, settings=None, terminal: AnsiTerminal | None = None) -> RuntimeState:
    """
    Create RuntimeState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    events = QueueEventSource(timer_tag=settings.timer_tag)
    group = TaskGroup(events, terminate_tag=settings.terminate_tag, name=settings.app_name)
    state = RuntimeState(
        settings=settings,
        events=events,
        group=group,
        terminal=terminal or AnsiTerminal(),
    )
    logger.debug("Runtime created (terminate_tag=%s timer_tag=%s)", settings.terminate_tag, settings.timer_tag)
    return state
