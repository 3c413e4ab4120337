# src/cooptasks/tasks/task_group.py

from __future__ import annotations

"""
Task group scheduler.

A small event-driven loop that, once per tick:
- starts tasks added since the previous tick (in registration order),
- waits for one event from the injected event source,
- resumes every running task whose filter matches the event,
- drops tasks that finished,
- escalates the reserved termination event.

Task bodies are generator functions: `event = yield "key"` suspends the task
until the next "key" event, `event = yield` until any event. A plain function
is a task that finishes on its first resume.

Groups nest without special casing:

    inner = TaskGroup()
    inner.add(blink, lamp)
    outer = TaskGroup(events)
    outer.add(inner.run_nested)
    outer.run()

The first failure raised by any task aborts the whole group and reaches the
caller of run(). Nothing is retried or isolated.
"""

import logging
from collections.abc import Generator
from typing import Any

from ..core.errors import CoopError, Terminated
from ..core.ports import EventSource, TaskFunction
from .task_models import TERMINATE_TAG, Event, Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskGroup:
    """Runs a set of cooperative tasks against one stream of events."""

    def __init__(
        self,
        events: EventSource | None = None,
        *,
        terminate_tag: str = TERMINATE_TAG,
        name: str | None = None,
    ) -> None:
        self._events = events
        self._terminate_tag = terminate_tag
        self.name = name or f"group-{id(self):x}"

        self._pending: list[Task] = []
        self._running: list[Task] = []
        self._is_running = False
        self._terminated = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def running_count(self) -> int:
        return len(self._running)

    def add(self, func: TaskFunction, *args: Any, name: str | None = None) -> Task:
        """
        Register a task. Works before run() and from inside running tasks.

        The task is started at the top of the next tick.
        """
        task = Task(func=func, args=args, name=name or "")
        self._pending.append(task)
        logger.debug("[%s] task added: %s (pending=%d)", self.name, task.name, len(self._pending))
        return task

    def run(self) -> bool:
        """
        Run the group until every task finished or stop() was called.

        Blocks on the event source between ticks. Returns False if the group is
        already running (or was terminated), True once the loop exits normally.
        Task failures and Terminated propagate to the caller.
        """
        if self._refuse_start():
            return False
        if self._events is None:
            raise CoopError(f"task group {self.name!r} has no event source", code="NO_EVENT_SOURCE")

        ticks = self._loop()
        try:
            try:
                next(ticks)
            except StopIteration as stop:
                return bool(stop.value)
            while True:
                # Only the loop returning ends the run; source errors propagate.
                event = Event.coerce(self._events.next_event())
                try:
                    ticks.send(event)
                except StopIteration as stop:
                    return bool(stop.value)
        finally:
            ticks.close()

    def run_nested(self) -> Generator[None, Event, bool]:
        """
        Generator form of run() for use as a task body of an outer group.

        The inner loop waits for events with a plain `yield`, so whoever
        resumes this generator (normally the outer group) feeds it.
        """
        if self._refuse_start():
            return False
        return (yield from self._loop())

    def stop(self) -> bool:
        """
        Ask the loop to exit at the next tick boundary.

        Suspended tasks are abandoned as they are. Returns False if the group
        was not running.
        """
        if not self._is_running:
            return False
        self._is_running = False
        logger.info("[%s] stop requested", self.name)
        return True

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def _refuse_start(self) -> bool:
        if self._terminated:
            logger.warning("[%s] run() refused: group was terminated", self.name)
            return True
        if self._is_running:
            logger.warning("[%s] run() refused: already running", self.name)
            return True
        return False

    def _loop(self) -> Generator[None, Event, bool]:
        self._is_running = True
        logger.info("[%s] started (pending=%d)", self.name, len(self._pending))
        try:
            while self._is_running and (self._pending or self._running):
                self._start_pending()
                if not self._is_running:
                    break

                event = yield None
                self._deliver(event)

                if event.tag == self._terminate_tag:
                    raise Terminated(self.name, event.tag)
        except Terminated:
            self._terminated = True
            logger.warning("[%s] terminated", self.name)
            raise
        finally:
            self._is_running = False

        logger.info("[%s] finished (pending=%d running=%d)", self.name, len(self._pending), len(self._running))
        return True

    def _start_pending(self) -> None:
        starting, self._pending = self._pending, []
        for i, task in enumerate(starting):
            try:
                result = task.resume(*task.args)
            except BaseException as e:
                # Keep not-yet-started tasks owned by the group.
                self._pending[:0] = starting[i + 1:]
                e.add_note(f"raised by task {task.name!r} while starting (group {self.name!r})")
                raise

            if result.finished:
                logger.debug("[%s] task finished on start: %s", self.name, task.name)
                continue

            self._running.append(task)
            logger.debug("[%s] task running: %s (filter=%r)", self.name, task.name, task.event_filter)

    def _deliver(self, event: Event) -> None:
        # Iterate a snapshot: finished tasks are removed from the live list as we go.
        for task in list(self._running):
            if not task.matches(event):
                continue
            try:
                result = task.resume(event)
            except BaseException as e:
                self._running.remove(task)
                e.add_note(f"raised by task {task.name!r} on event {event.tag!r} (group {self.name!r})")
                raise

            if result.finished:
                self._running.remove(task)
                logger.debug("[%s] task finished: %s", self.name, task.name)

    def snapshot(self) -> dict[str, list[str]]:
        """Names of pending and running tasks, in scheduling order."""
        return {
            TaskStatus.PENDING.value: [t.name for t in self._pending],
            TaskStatus.RUNNING.value: [t.name for t in self._running],
        }
