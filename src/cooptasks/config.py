# src/cooptasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
- Event tags are configurable so a host with different names can plug in.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "COOP"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_tag(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip()
    return raw or default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path
    log_file_name: str

    # ---- Host ----
    console_enabled: bool
    signals_enabled: bool

    # ---- Event tags ----
    terminate_tag: str
    timer_tag: str
    console_tag: str

    @property
    def log_file(self) -> Path:
        return self.data_dir / self.log_file_name

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "cooptasks").strip() or "cooptasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/cooptasks"))
        log_file_name = _env(_k("LOG_FILE"), "cooptasks.log").strip() or "cooptasks.log"

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        signals_enabled = _env_bool(_k("SIGNALS_ENABLED"), True)

        terminate_tag = _env_tag(_k("TERMINATE_TAG"), "terminate")
        timer_tag = _env_tag(_k("TIMER_TAG"), "timer")
        console_tag = _env_tag(_k("CONSOLE_TAG"), "line")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            log_file_name=log_file_name,
            console_enabled=console_enabled,
            signals_enabled=signals_enabled,
            terminate_tag=terminate_tag,
            timer_tag=timer_tag,
            console_tag=console_tag,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
