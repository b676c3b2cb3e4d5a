# tests/fakes.py

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from smarttask.core.ports import TaskRecord


@dataclass
class FixedClock:
    """Deterministic clock; tests move it with advance()."""

    now: datetime = field(default_factory=lambda: datetime(2026, 10, 19, 12, 0, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeTaskRepo:
    """
    In-memory TaskRepo.

    Keeps every snapshot it receives so tests can assert on write counts.
    """

    def __init__(self, records: list[TaskRecord] | None = None, *, fail: bool = False) -> None:
        self.records: list[TaskRecord] = list(records or [])
        self.saves: list[list[TaskRecord]] = []
        self.fail = fail

    def load_tasks(self) -> list[TaskRecord]:
        return copy.deepcopy(self.records)

    def save_tasks(self, records: list[TaskRecord]) -> None:
        if self.fail:
            raise OSError("disk full")
        self.records = copy.deepcopy(records)
        self.saves.append(self.records)


class FakeKV:
    """dict-backed KeyValueRepo."""

    def __init__(self) -> None:
        self.data: dict[tuple[str, str], str] = {}

    def get(self, namespace: str, key: str) -> str | None:
        return self.data.get((namespace, key))

    def set(self, namespace: str, key: str, value: str) -> None:
        self.data[(namespace, key)] = value

    def delete(self, namespace: str, key: str) -> None:
        self.data.pop((namespace, key), None)
