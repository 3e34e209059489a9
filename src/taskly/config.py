# src/taskly/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time: every value has a default.
- Bad values fall back to defaults instead of crashing the app.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLY"

STORAGE_BACKENDS = ("json", "sqlite", "memory")
DEFAULT_STORAGE_KEY = "taskly.tasks"

logger = logging.getLogger(__name__)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value not in choices:
        logger.warning("Unknown %s=%r, using %r.", name, raw, default)
        return default
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    show_landing: bool

    # ---- Storage ----
    data_dir: Path
    storage_backend: str
    storage_key: str
    sqlite_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Taskly").strip() or "Taskly"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        show_landing = _env_bool(_k("SHOW_LANDING"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskly"))
        storage_backend = _env_choice(_k("STORAGE_BACKEND"), STORAGE_BACKENDS, "json")
        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY
        sqlite_path = _env_path(_k("SQLITE_PATH"), data_dir / "storage.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            show_landing=show_landing,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_key=storage_key,
            sqlite_path=sqlite_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load settings once (reads .env on first call, never overrides real env vars)."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
