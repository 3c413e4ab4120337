# tests/conftest.py

from __future__ import annotations

import io
from pathlib import Path
from types import SimpleNamespace

import pytest

from cooptasks.cli.bootstrap import create_runtime
from cooptasks.core.state import RuntimeState
from cooptasks.display.terminal import AnsiTerminal

from .fakes import Recorder


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with RuntimeState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="test-group",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        log_file_name="test.log",
        console_enabled=False,
        signals_enabled=False,
        terminate_tag="terminate",
        timer_tag="timer",
        console_tag="line",
    )


@pytest.fixture()
def screen() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def emitted() -> list[str]:
    return []


@pytest.fixture()
def state(settings: SimpleNamespace, screen: io.StringIO, emitted: list[str]) -> RuntimeState:
    """RuntimeState with a captured terminal; emitted lines land in `emitted`."""
    runtime = create_runtime(settings=settings, terminal=AnsiTerminal(screen))
    runtime.emit = emitted.append
    return runtime


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()
