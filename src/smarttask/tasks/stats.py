# src/smarttask/tasks/stats.py

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .task_models import Task, TaskStats


def is_today(created_at: datetime, now: datetime) -> bool:
    """Same calendar day in the local timezone."""
    return created_at.astimezone().date() == now.astimezone().date()


def daily_stats(tasks: Sequence[Task], now: datetime) -> TaskStats:
    """
    Daily window.

    Every pending task counts, whatever its age; completed tasks count only if
    they were created today. total is the sum of the two, so completed tasks
    from earlier days do not show up here.
    """
    pending = sum(1 for t in tasks if not t.completed)
    completed_today = sum(1 for t in tasks if t.completed and is_today(t.created_at, now))
    return TaskStats(total=pending + completed_today, pending=pending, completed=completed_today)


def monthly_stats(tasks: Sequence[Task]) -> TaskStats:
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(total=len(tasks), pending=len(tasks) - completed, completed=completed)
