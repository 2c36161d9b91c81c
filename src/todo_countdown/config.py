# src/todo_countdown/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is read at import time except the environment.
- Paths default to a gitignored local data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    # ---- View ----
    tick_seconds: float
    default_theme: str
    animations: bool
    quiet_tick_logs: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo").strip() or "todo"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "todo.sqlite3")

        tick_seconds = max(0.1, _env_float(_k("TICK_SECONDS"), 1.0))
        default_theme = _env(_k("DEFAULT_THEME"), "light").strip().lower()
        if default_theme not in ("light", "dark"):
            default_theme = "light"
        animations = _env_bool(_k("ANIMATIONS"), True)
        quiet_tick_logs = _env_bool(_k("QUIET_TICK_LOGS"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            tick_seconds=tick_seconds,
            default_theme=default_theme,
            animations=animations,
            quiet_tick_logs=quiet_tick_logs,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
