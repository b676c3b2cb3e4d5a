# src/smarttask/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the SQLite key-value store and the session store into AppState,
- restores the saved session through SessionController.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.session import SessionController
from ..core.state import AppState
from ..tasks.task_store import KeyValueStore, SessionStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv = KeyValueStore(settings.db_path)
    return AppState(
        settings=settings,
        kv=kv,
        session_store=SessionStore(
            kv,
            session_key=settings.session_key,
            theme_key=settings.theme_key,
        ),
    )


def create_controller(*, settings=None) -> SessionController:
    """AppState + controller, with theme and any saved session restored."""
    ctl = SessionController(create_initial_state(settings=settings))
    user = ctl.restore()
    if user is None:
        logger.info("No saved session; waiting for /login.")
    return ctl
