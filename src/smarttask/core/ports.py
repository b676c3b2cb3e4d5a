# src/smarttask/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from typing import Any, Protocol

TaskRecord = dict[str, Any]
# Serialized task: {"id", "text", "completed", "createdAt", "priority", "tags", "timeSpent", "isTimerRunning"}.


class KeyValueRepo(Protocol):
    """Durable string store addressed by (namespace, key)."""

    def get(self, namespace: str, key: str) -> str | None: ...
    def set(self, namespace: str, key: str, value: str) -> None: ...
    def delete(self, namespace: str, key: str) -> None: ...


class TaskRepo(Protocol):
    """
    Per-user task blob.

    Implementations receive full snapshots only and never hand back live objects.
    """

    def load_tasks(self) -> list[TaskRecord]: ...
    def save_tasks(self, records: list[TaskRecord]) -> None: ...


class SessionRepo(Protocol):
    def load_user(self) -> Any | None: ...
    def save_user(self, user: Any) -> None: ...
    def clear_user(self) -> None: ...

    def load_theme(self) -> str | None: ...
    def save_theme(self, theme: str) -> None: ...
