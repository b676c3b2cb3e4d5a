# src/smarttask/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from ..core.ports import KeyValueRepo, TaskRecord
from .task_models import Task, Theme, User

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "smart_task_pro_data"
SESSION_KEY = "smart_task_pro_session"
THEME_KEY = "smart_task_pro_theme"

# Namespace holding app-wide (not per-user) values: session identity, theme.
APP_NAMESPACE = "app"


class KeyValueStore:
    """
    SQLite key-value store.

    One row per (namespace, key). Values are opaque strings (JSON for tasks).

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "smarttask.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("KeyValueStore ready db=%s entries=%s", self._db_path, self.count())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    namespace TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL,
                    PRIMARY KEY (namespace, key)
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def count(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM kv").fetchone()
            return int(n)
        finally:
            conn.close()

    def get(self, namespace: str, key: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT value FROM kv WHERE namespace = ? AND key = ?",
                (namespace, key),
            ).fetchone()
            return str(row["value"]) if row else None
        finally:
            conn.close()

    def set(self, namespace: str, key: str, value: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(namespace, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(namespace, key)
                DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (namespace, key, value, time.time()),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, namespace: str, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM kv WHERE namespace = ? AND key = ?", (namespace, key))
            conn.commit()
        finally:
            conn.close()


class UserTaskRepo:
    """
    The task blob of one user: an ordered JSON list of task records.

    Key = (namespace, username). The namespace is fixed per deployment, so two
    users never share a blob.
    """

    def __init__(self, kv: KeyValueRepo, username: str, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        if not username or not username.strip():
            raise ValueError("username is required")
        self._kv = kv
        self.namespace = namespace
        self.username = username.strip()

    def load_tasks(self) -> list[TaskRecord]:
        raw = self._kv.get(self.namespace, self.username)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupt task blob for user=%s; starting empty.", self.username)
            return []
        if not isinstance(data, list):
            logger.warning("Task blob for user=%s is not a list; starting empty.", self.username)
            return []
        return [r for r in data if isinstance(r, dict)]

    def save_tasks(self, records: list[TaskRecord]) -> None:
        self._kv.set(self.namespace, self.username, json.dumps(records, ensure_ascii=False))
        logger.debug("Saved %d task(s) for user=%s", len(records), self.username)


def decode_tasks(records: list[dict[str, Any]]) -> list[Task]:
    """Records -> Task objects; unreadable records are skipped with a warning."""
    out: list[Task] = []
    for rec in records:
        try:
            out.append(Task.from_record(rec))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping unreadable task record id=%s", rec.get("id"))
    return out


class SessionStore:
    """Current logged-in user and the theme preference."""

    def __init__(
        self,
        kv: KeyValueRepo,
        *,
        session_key: str = SESSION_KEY,
        theme_key: str = THEME_KEY,
    ) -> None:
        self._kv = kv
        self._session_key = session_key
        self._theme_key = theme_key

    def load_user(self) -> User | None:
        raw = self._kv.get(APP_NAMESPACE, self._session_key)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return User(username=str(data["username"]), id=str(data["id"]))
        except (json.JSONDecodeError, KeyError, TypeError):
            logger.warning("Ignoring unreadable saved session.")
            return None

    def save_user(self, user: User) -> None:
        self._kv.set(APP_NAMESPACE, self._session_key, json.dumps(user.to_record()))

    def clear_user(self) -> None:
        self._kv.delete(APP_NAMESPACE, self._session_key)

    def load_theme(self) -> Theme | None:
        raw = self._kv.get(APP_NAMESPACE, self._theme_key)
        if raw is None:
            return None
        try:
            return Theme(raw)
        except ValueError:
            return None

    def save_theme(self, theme: Theme | str) -> None:
        self._kv.set(APP_NAMESPACE, self._theme_key, Theme(theme).value)
