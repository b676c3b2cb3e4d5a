# src/smarttask/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_record(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.LOW
        try:
            return cls(raw)
        except ValueError:
            return cls.LOW


class FilterStatus(StrEnum):
    ALL = "All"
    PENDING = "Pending"
    COMPLETED = "Completed"


class AppView(StrEnum):
    """Dashboard shows the daily window, Records the whole retained window."""

    DASHBOARD = "Dashboard"
    RECORDS = "Records"


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(slots=True, frozen=True)
class User:
    username: str
    id: str

    def to_record(self) -> dict[str, str]:
        return {"username": self.username, "id": self.id}


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    pending: int
    completed: int


def parse_timestamp(raw: str) -> datetime:
    """ISO-8601 -> aware datetime. Naive values are taken as UTC."""
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def format_timestamp(dt: datetime) -> str:
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class Task:
    id: str
    text: str
    created_at: datetime
    priority: Priority = Priority.LOW
    tags: list[str] = field(default_factory=list)

    completed: bool = False
    time_spent: int = 0
    is_timer_running: bool = False

    def to_record(self) -> dict[str, Any]:
        """Serialized shape of one entry in the persisted per-user blob."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
            "priority": self.priority.value,
            "tags": list(self.tags),
            "timeSpent": self.time_spent,
            "isTimerRunning": self.is_timer_running,
        }

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> Task:
        """
        Rebuild a task from a persisted record.

        Older blobs may lack timeSpent / isTimerRunning; those default to 0 / False.
        Raises KeyError / ValueError when id, text or createdAt are unusable.
        """
        tags_raw = raw.get("tags") or []
        tags = [str(t) for t in tags_raw] if isinstance(tags_raw, list) else []
        return cls(
            id=str(raw["id"]),
            text=str(raw["text"]),
            created_at=parse_timestamp(str(raw["createdAt"])),
            priority=Priority.from_record(raw.get("priority")),
            tags=tags,
            completed=bool(raw.get("completed", False)),
            time_spent=max(0, int(raw.get("timeSpent") or 0)),
            is_timer_running=bool(raw.get("isTimerRunning")),
        )
