# src/cooptasks/events/sources.py

"""
Event sources.

QueueEventSource is the host side of a running program: any thread (console
reader, signal handler, timers) posts events, the task group pulls them one at
a time. ScriptedEventSource replays a fixed sequence and is what tests use.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from collections import deque
from collections.abc import Iterable
from typing import Any

from ..core.errors import EventSourceExhausted
from ..tasks.task_models import TIMER_TAG, Event

logger = logging.getLogger(__name__)


class QueueEventSource:
    """Thread-safe FIFO of events with timer support."""

    def __init__(self, *, timer_tag: str = TIMER_TAG) -> None:
        self._queue: queue.Queue[Event] = queue.Queue()
        self._timer_tag = timer_tag
        self._timer_ids = itertools.count(1)
        self._timers: dict[int, threading.Timer] = {}
        self._lock = threading.Lock()

    def post(self, tag: Any, *values: Any) -> None:
        self._queue.put(Event(tag, *values))

    def next_event(self, timeout: float | None = None) -> Event:
        """Block until an event is available (queue.Empty after `timeout`)."""
        return self._queue.get(timeout=timeout)

    def pending(self) -> int:
        return self._queue.qsize()

    def start_timer(self, seconds: float) -> int:
        """Post (timer_tag, id) after `seconds`. Returns the timer id."""
        with self._lock:
            timer_id = next(self._timer_ids)
            timer = threading.Timer(max(0.0, float(seconds)), self._fire, args=(timer_id,))
            timer.daemon = True
            self._timers[timer_id] = timer
        timer.start()
        return timer_id

    def cancel_timer(self, timer_id: int) -> bool:
        with self._lock:
            timer = self._timers.pop(timer_id, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def close(self) -> None:
        """Cancel outstanding timers."""
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if timers:
            logger.debug("Cancelled %d pending timers.", len(timers))

    def _fire(self, timer_id: int) -> None:
        with self._lock:
            if self._timers.pop(timer_id, None) is None:
                return
        self.post(self._timer_tag, timer_id)


class ScriptedEventSource:
    """
    Replays a finite sequence of events.

    Items may be Event objects, (tag, *values) tuples or bare tags. Timer ids
    are handed out deterministically (1, 2, ...) and nothing fires on its own:
    the script has to contain the matching ("timer", id) events.
    """

    def __init__(self, events: Iterable[Any] = ()) -> None:
        self._events: deque[Event] = deque(Event.coerce(e) for e in events)
        self._timer_ids = itertools.count(1)
        self.delivered: list[Event] = []
        self.timers: list[tuple[int, float]] = []

    def extend(self, events: Iterable[Any]) -> None:
        self._events.extend(Event.coerce(e) for e in events)

    def next_event(self) -> Event:
        if not self._events:
            raise EventSourceExhausted(len(self.delivered))
        event = self._events.popleft()
        self.delivered.append(event)
        return event

    def remaining(self) -> int:
        return len(self._events)

    def start_timer(self, seconds: float) -> int:
        timer_id = next(self._timer_ids)
        self.timers.append((timer_id, float(seconds)))
        return timer_id
