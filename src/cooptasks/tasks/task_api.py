# src/cooptasks/tasks/task_api.py

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from ..core.ports import TimerService
from .task_models import TIMER_TAG, Event


def sleep(
    timers: TimerService,
    seconds: float,
    *,
    timer_tag: str = TIMER_TAG,
) -> Generator[str, Event, None]:
    """
    Suspend the calling task for `seconds`.

    Use from a task body: `yield from sleep(events, 2.0)`. Timer events that
    belong to other tasks are ignored.
    """
    timer_id = timers.start_timer(seconds)
    while True:
        event = yield timer_tag
        if event.values and event.values[0] == timer_id:
            return


def pull_event(*tags: Any) -> Generator[Any, Event, Event]:
    """
    Wait for the next event whose tag is one of `tags` (any event if none given).

    A single tag is passed to the scheduler as the filter; several tags need
    local filtering, so the task is resumed on every event meanwhile.
    """
    if len(tags) == 1:
        return (yield tags[0])

    wanted = set(tags)
    while True:
        event = yield None
        if not wanted or event.tag in wanted:
            return event
