# tests/test_console.py

from __future__ import annotations

import io

import pytest

from cooptasks.cli.commands import registry
from cooptasks.connectors.console_connector import CONSOLE_CLOSED_TAG, ConsoleReader, console_task
from cooptasks.core.state import RuntimeState


def test_console_task_answers_lines_until_exit(state: RuntimeState, emitted: list[str]) -> None:
    state.group.add(console_task, state, name="console")
    for line in ("hello", "", "/status", "/exit", "/help"):
        state.events.post("line", line)

    assert state.group.run() is True

    assert state.history == ["hello", "/status", "/exit"]
    assert "Type /help" in emitted[0]
    assert "Not a command: 'hello'" in emitted[1]
    assert "Tasks running: 1 [console]" in emitted[2]
    assert emitted[3].endswith("Stopping.")
    assert len(emitted) == 4
    # /help was never consumed.
    assert state.events.pending() == 1


def test_console_closed_stops_the_group(state: RuntimeState) -> None:
    state.group.add(console_task, state)
    state.events.post(CONSOLE_CLOSED_TAG)

    assert state.group.run() is True
    assert state.group.is_running is False


def test_crashing_command_is_reported(
    state: RuntimeState,
    emitted: list[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def boom(state, args):
        raise RuntimeError("nope")

    monkeypatch.setitem(registry._handlers, "boom", boom)
    state.group.add(console_task, state)
    state.events.post("line", "/boom")
    state.events.post("line", "/quit")

    assert state.group.run() is True
    assert "Internal error" in emitted[1]


def test_console_reader_posts_lines_then_closed() -> None:
    posted: list[tuple] = []
    reader = ConsoleReader(lambda *e: posted.append(e), tag="input", stream=io.StringIO("a\r\nb\n"))

    reader.start()
    reader.join(timeout=5.0)

    assert posted == [("input", "a"), ("input", "b"), (CONSOLE_CLOSED_TAG,)]


def test_stopped_reader_does_not_post_closed() -> None:
    posted: list[tuple] = []
    reader = ConsoleReader(lambda *e: posted.append(e), stream=io.StringIO("a\n"))
    reader.stop()

    reader.run()

    assert posted == []
