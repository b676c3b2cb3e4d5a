# tests/test_retention.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from smarttask.tasks.retention import filter_retained, is_within_window
from smarttask.tasks.task_models import Task

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)


def _task(task_id: str, age: timedelta) -> Task:
    return Task(id=task_id, text=task_id, created_at=NOW - age)


def test_window_boundaries() -> None:
    assert is_within_window(NOW - timedelta(days=29), NOW)
    assert is_within_window(NOW - timedelta(days=30), NOW)
    assert not is_within_window(NOW - timedelta(days=30, seconds=1), NOW)
    assert not is_within_window(NOW - timedelta(days=31), NOW)


def test_future_timestamps_are_kept() -> None:
    assert is_within_window(NOW + timedelta(hours=2), NOW)


def test_filter_drops_old_and_preserves_order() -> None:
    tasks = [
        _task("new", timedelta(hours=1)),
        _task("ancient", timedelta(days=31)),
        _task("edge", timedelta(days=30)),
        _task("recent", timedelta(days=29)),
    ]
    kept = filter_retained(tasks, NOW)
    assert [t.id for t in kept] == ["new", "edge", "recent"]


def test_custom_window() -> None:
    tasks = [_task("a", timedelta(days=2)), _task("b", timedelta(days=8))]
    assert [t.id for t in filter_retained(tasks, NOW, days=7)] == ["a"]


def test_empty_collection_is_valid() -> None:
    assert filter_retained([], NOW) == []
