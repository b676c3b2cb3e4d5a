# src/smarttask/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a local default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "SMARTTASK"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


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
    console_enabled: bool
    color: bool

    # ---- Local data paths ----
    data_dir: Path
    db_path: Path

    # ---- Storage keys ----
    storage_namespace: str
    session_key: str
    theme_key: str

    # ---- Tracker tuning ----
    retention_days: int
    tick_seconds: float
    error_clear_seconds: float
    default_theme: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "SmartTask Pro")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        color = _env_bool(_k("COLOR"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/smarttask"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "smarttask.sqlite3")

        storage_namespace = _env(_k("STORAGE_NAMESPACE"), "smart_task_pro_data")
        session_key = _env(_k("SESSION_KEY"), "smart_task_pro_session")
        theme_key = _env(_k("THEME_KEY"), "smart_task_pro_theme")

        # Retention must keep at least one day; ticks faster than 10ms are a config mistake.
        retention_days = max(1, _env_int(_k("RETENTION_DAYS"), 30))
        tick_seconds = max(0.01, _env_float(_k("TICK_SECONDS"), 1.0))
        error_clear_seconds = max(0.0, _env_float(_k("ERROR_CLEAR_SECONDS"), 3.0))

        default_theme = _env(_k("THEME"), "light").strip().lower()
        if default_theme not in ("light", "dark"):
            default_theme = "light"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            color=color,
            data_dir=data_dir,
            db_path=db_path,
            storage_namespace=storage_namespace,
            session_key=session_key,
            theme_key=theme_key,
            retention_days=retention_days,
            tick_seconds=tick_seconds,
            error_clear_seconds=error_clear_seconds,
            default_theme=default_theme,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
