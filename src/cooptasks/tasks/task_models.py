# src/cooptasks/tasks/task_models.py

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..core.ports import TaskBody, TaskFunction

TERMINATE_TAG = "terminate"
TIMER_TAG = "timer"


class TaskStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    FINISHED = "finished"


class ResumeStatus(StrEnum):
    SUSPENDED = "suspended"
    FINISHED = "finished"


class Event(tuple):
    """
    One host event: (tag, *values).

    Being a tuple, it unpacks like the raw event (`tag, key = yield "key"`);
    .tag and .values are there for readability.
    """

    __slots__ = ()

    def __new__(cls, tag: Any, *values: Any) -> Event:
        return super().__new__(cls, (tag, *values))

    @classmethod
    def coerce(cls, raw: Any) -> Event:
        """Accept an Event, a (tag, *values) sequence or a bare tag."""
        if isinstance(raw, Event):
            return raw
        if isinstance(raw, (tuple, list)):
            if not raw:
                raise ValueError("event must have a tag")
            return cls(*raw)
        return cls(raw)

    @property
    def tag(self) -> Any:
        return self[0]

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(self[1:])

    def __getnewargs__(self) -> tuple[Any, ...]:
        return tuple(self)

    def __repr__(self) -> str:
        return f"Event{tuple(self)!r}"


def _payload(args: tuple[Any, ...]) -> Any:
    # What a suspended body receives from its yield.
    if not args:
        return None
    if len(args) == 1:
        return args[0]
    return Event(*args)


def normalize_filter(value: Any) -> Any:
    # None and "" both mean "resume on any event".
    if value is None or value == "":
        return None
    return value


@dataclass(slots=True, frozen=True)
class ResumeResult:
    status: ResumeStatus
    event_filter: Any = None
    value: Any = None

    @property
    def finished(self) -> bool:
        return self.status == ResumeStatus.FINISHED

    @classmethod
    def suspended(cls, event_filter: Any) -> ResumeResult:
        return cls(ResumeStatus.SUSPENDED, event_filter=normalize_filter(event_filter))

    @classmethod
    def done(cls, value: Any = None) -> ResumeResult:
        return cls(ResumeStatus.FINISHED, value=value)


@dataclass(slots=True, eq=False)
class Task:
    """
    A single suspendable unit of work.

    The first resume calls func(*args). If that returns a generator, the
    generator becomes the task body and is advanced to its first yield;
    anything else means the task finished without suspending. Later resumes
    send the event into the body.

    Exceptions raised by the body propagate out of resume() untouched, except
    a StopIteration escaping func itself, which becomes RuntimeError.
    """

    func: TaskFunction
    args: tuple[Any, ...] = ()
    name: str = ""
    status: TaskStatus = TaskStatus.PENDING
    event_filter: Any = None
    result: Any = None
    _body: TaskBody | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = getattr(self.func, "__qualname__", None) or repr(self.func)

    def matches(self, event: Event) -> bool:
        return self.event_filter is None or self.event_filter == event.tag

    def resume(self, *args: Any) -> ResumeResult:
        if self.status == TaskStatus.FINISHED:
            raise RuntimeError(f"task {self.name!r} already finished")

        starting = self.status == TaskStatus.PENDING
        if starting:
            self.status = TaskStatus.RUNNING
            try:
                out = self.func(*args)
            except StopIteration as e:
                # Same treatment generators get under PEP 479.
                self._abort()
                raise RuntimeError(f"task {self.name!r} raised StopIteration") from e
            except BaseException:
                self._abort()
                raise
            if not inspect.isgenerator(out):
                return self._finish(out)
            self._body = out

        try:
            assert self._body is not None
            if starting:
                yielded = next(self._body)
            else:
                yielded = self._body.send(_payload(args))
        except StopIteration as stop:
            return self._finish(stop.value)
        except BaseException:
            self._abort()
            raise

        result = ResumeResult.suspended(yielded)
        self.event_filter = result.event_filter
        return result

    def _abort(self) -> None:
        self.status = TaskStatus.FINISHED
        self._body = None

    def _finish(self, value: Any) -> ResumeResult:
        self.status = TaskStatus.FINISHED
        self.result = value
        self._body = None
        self.event_filter = None
        return ResumeResult.done(value)
