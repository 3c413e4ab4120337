# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from cooptasks.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("COOP_APP_NAME", "COOP_LOG_LEVEL", "COOP_DATA_DIR", "COOP_TERMINATE_TAG", "COOP_CONSOLE_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "cooptasks"
    assert s.log_level == "INFO"
    assert s.terminate_tag == "terminate"
    assert s.console_enabled is True
    assert s.log_file == Path(".local/cooptasks") / "cooptasks.log"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COOP_LOG_LEVEL", "debug")
    monkeypatch.setenv("COOP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("COOP_CONSOLE_ENABLED", "no")
    monkeypatch.setenv("COOP_TERMINATE_TAG", "  quit ")
    monkeypatch.setenv("COOP_TIMER_TAG", "")

    s = Settings.from_env()

    assert s.log_level == "DEBUG"
    assert s.data_dir == tmp_path
    assert s.console_enabled is False
    assert s.terminate_tag == "quit"
    assert s.timer_tag == "timer"
