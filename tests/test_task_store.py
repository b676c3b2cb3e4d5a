# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from smarttask.tasks.task_models import Priority, Task, Theme, User
from smarttask.tasks.task_store import (
    APP_NAMESPACE,
    KeyValueStore,
    SessionStore,
    UserTaskRepo,
    decode_tasks,
)

from .fakes import FakeKV


def test_kv_set_get_overwrite_delete(tmp_path: Path) -> None:
    kv = KeyValueStore(tmp_path / "kv.sqlite3")
    assert kv.get("ns", "k") is None

    kv.set("ns", "k", "v1")
    kv.set("ns", "k", "v2")
    kv.set("other", "k", "x")
    assert kv.get("ns", "k") == "v2"
    assert kv.get("other", "k") == "x"
    assert kv.count() == 2

    kv.delete("ns", "k")
    assert kv.get("ns", "k") is None
    kv.delete("ns", "missing")
    assert kv.count() == 1


def test_kv_survives_reopen(tmp_path: Path) -> None:
    db = tmp_path / "kv.sqlite3"
    KeyValueStore(db).set("ns", "k", "kept")
    assert KeyValueStore(db).get("ns", "k") == "kept"


def test_user_repo_round_trip_and_isolation(tmp_path: Path) -> None:
    kv = KeyValueStore(tmp_path / "kv.sqlite3")
    alice = UserTaskRepo(kv, "alice")
    bob = UserTaskRepo(kv, "bob")

    task = Task(
        id="t1",
        text="Buy groceries",
        created_at=datetime(2026, 10, 1, 8, 0, tzinfo=UTC),
        priority=Priority.MEDIUM,
        tags=["Shopping", "Errands"],
        time_spent=42,
    )
    alice.save_tasks([task.to_record()])

    assert bob.load_tasks() == []
    loaded = decode_tasks(alice.load_tasks())
    assert loaded == [task]
    assert kv.get("smart_task_pro_data", "alice") is not None


def test_user_repo_requires_username() -> None:
    with pytest.raises(ValueError):
        UserTaskRepo(FakeKV(), "  ")


@pytest.mark.parametrize("blob", ["{not json", json.dumps({"id": "x"}), json.dumps("text")])
def test_corrupt_blob_loads_as_empty(blob: str) -> None:
    kv = FakeKV()
    kv.set("smart_task_pro_data", "carol", blob)
    assert UserTaskRepo(kv, "carol").load_tasks() == []


def test_decode_normalizes_and_skips_bad_records() -> None:
    records = [
        {"id": "a", "text": "Old record", "completed": True, "createdAt": "2026-10-10T10:00:00.000Z",
         "priority": "High", "tags": ["Work"]},
        {"id": "b", "text": "No date"},
        {"id": "c", "text": "Odd priority", "createdAt": "2026-10-11T10:00:00", "priority": "Urgent",
         "timeSpent": None, "isTimerRunning": 1},
    ]
    tasks = decode_tasks(records)
    assert [t.id for t in tasks] == ["a", "c"]

    a, c = tasks
    assert a.time_spent == 0
    assert a.is_timer_running is False
    assert a.priority == Priority.HIGH
    assert c.priority == Priority.LOW
    assert c.is_timer_running is True
    assert c.created_at.tzinfo is not None


def test_session_store_user_and_theme() -> None:
    kv = FakeKV()
    store = SessionStore(kv)
    assert store.load_user() is None
    assert store.load_theme() is None

    store.save_user(User(username="dana", id="u-1"))
    assert store.load_user() == User(username="dana", id="u-1")

    store.save_theme(Theme.DARK)
    assert store.load_theme() == Theme.DARK

    store.clear_user()
    assert store.load_user() is None
    assert store.load_theme() == Theme.DARK


def test_session_store_ignores_garbage() -> None:
    kv = FakeKV()
    kv.set(APP_NAMESPACE, "smart_task_pro_session", "{broken")
    kv.set(APP_NAMESPACE, "smart_task_pro_theme", "sepia")
    store = SessionStore(kv)
    assert store.load_user() is None
    assert store.load_theme() is None
