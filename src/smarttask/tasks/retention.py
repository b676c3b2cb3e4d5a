# src/smarttask/tasks/retention.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from .task_models import Task

logger = logging.getLogger(__name__)

RETENTION_DAYS = 30


def is_within_window(created_at: datetime, now: datetime, days: int = RETENTION_DAYS) -> bool:
    """True if created_at is at most `days` days before now (boundary included)."""
    return now - created_at <= timedelta(days=days)


def filter_retained(
    tasks: Iterable[Task],
    now: datetime,
    *,
    days: int = RETENTION_DAYS,
) -> list[Task]:
    """
    Keep tasks created within the rolling window, order preserved.

    Dropped tasks are gone for good: the caller persists the filtered list
    on its next write.
    """
    kept: list[Task] = []
    dropped = 0
    for task in tasks:
        if is_within_window(task.created_at, now, days):
            kept.append(task)
        else:
            dropped += 1
    if dropped:
        logger.info("Retention dropped %d task(s) older than %d days", dropped, days)
    return kept
