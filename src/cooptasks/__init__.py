# src/cooptasks/__init__.py

"""Cooperative, event-driven task groups."""

from __future__ import annotations

from .core.errors import CoopError, EventSourceExhausted, Terminated
from .events.sources import QueueEventSource, ScriptedEventSource
from .tasks.task_api import pull_event, sleep
from .tasks.task_group import TaskGroup
from .tasks.task_models import Event, ResumeResult, ResumeStatus, Task, TaskStatus

__version__ = "0.1.0"

__all__ = [
    "CoopError",
    "Event",
    "EventSourceExhausted",
    "QueueEventSource",
    "ResumeResult",
    "ResumeStatus",
    "ScriptedEventSource",
    "Task",
    "TaskGroup",
    "TaskStatus",
    "Terminated",
    "pull_event",
    "sleep",
]
