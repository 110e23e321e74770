# src/pocket_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a local default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "POCKET_TODO"

DEFAULT_STORAGE_KEY = "tasks"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
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


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data (ignored by git) ----
    data_dir: Path
    db_path: Path
    storage_key: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "pocket-todo").strip() or "pocket-todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/pocket_todo"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "storage.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            db_path=db_path,
            storage_key=storage_key,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
