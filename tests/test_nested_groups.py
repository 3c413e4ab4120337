# tests/test_nested_groups.py

from __future__ import annotations

import pytest

from cooptasks.core.errors import Terminated
from cooptasks.events.sources import ScriptedEventSource
from cooptasks.tasks.task_group import TaskGroup

from .fakes import Recorder


def forever():
    while True:
        yield


@pytest.fixture()
def watcher(recorder: Recorder):
    def _watcher(tag, label):
        event = yield tag
        recorder(label, event.values[0])

    return _watcher


def test_inner_group_runs_as_task_of_outer(recorder: Recorder, watcher) -> None:
    source = ScriptedEventSource([("a", 1), ("b", 2), ("a", 3)])
    outer = TaskGroup(source, name="outer")
    inner = TaskGroup(name="inner")

    inner.add(watcher, "a", "inner-a")
    inner.add(watcher, "b", "inner-b")
    inner_task = outer.add(inner.run_nested)
    outer.add(watcher, "a", "outer-a")

    assert outer.run() is True
    assert recorder.log == [("inner-a", 1), ("outer-a", 1), ("inner-b", 2)]
    assert inner_task.result is True
    assert inner.is_running is False
    assert source.remaining() == 1


def test_inner_group_via_yield_from(recorder: Recorder, watcher) -> None:
    def host():
        inner = TaskGroup(name="inner")
        inner.add(watcher, "x", "deep")
        finished = yield from inner.run_nested()
        recorder("inner-done", finished)

    outer = TaskGroup(ScriptedEventSource([("x", 5)]))
    outer.add(host)

    assert outer.run() is True
    assert recorder.log == [("deep", 5), ("inner-done", True)]


def test_inner_stop_lets_outer_continue(recorder: Recorder) -> None:
    inner = TaskGroup(name="inner")
    outer = TaskGroup(ScriptedEventSource(["halt", "later"]), name="outer")

    def halter():
        yield "halt"
        inner.stop()
        yield

    def outer_listener():
        while True:
            event = yield
            recorder(event.tag)
            if event.tag == "later":
                return

    inner.add(halter)
    inner.add(forever)
    outer.add(inner.run_nested)
    outer.add(outer_listener)

    assert outer.run() is True
    assert recorder.names() == ["halt", "later"]
    assert inner.running_count == 2


def test_nested_run_on_running_group_finishes_immediately() -> None:
    inner = TaskGroup(name="inner")
    outer = TaskGroup(ScriptedEventSource(["e"]))

    inner.add(forever)
    first = outer.add(inner.run_nested)
    second = outer.add(inner.run_nested)
    outer.add(inner.stop)

    # `second` is refused while `first` drives the inner loop.
    assert outer.run() is True
    assert second.result is False
    assert first.result is True


def test_termination_reaches_every_level() -> None:
    inner = TaskGroup(name="inner")
    outer = TaskGroup(ScriptedEventSource(["terminate"]), name="outer")

    inner.add(forever)
    outer.add(inner.run_nested)
    outer.add(forever)

    with pytest.raises(Terminated):
        outer.run()

    assert inner.terminated and outer.terminated
    assert not inner.is_running and not outer.is_running


def test_inner_failure_reaches_outer_caller() -> None:
    inner = TaskGroup(name="inner")
    outer = TaskGroup(ScriptedEventSource(["go"]), name="outer")

    def broken():
        yield "go"
        raise ZeroDivisionError("inner broke")

    inner.add(broken)
    outer.add(inner.run_nested, name="inner-runner")

    with pytest.raises(ZeroDivisionError) as info:
        outer.run()

    notes = getattr(info.value, "__notes__", [])
    assert any("'inner'" in n for n in notes)
    assert any("inner-runner" in n and "'outer'" in n for n in notes)
    assert not inner.is_running and not outer.is_running
