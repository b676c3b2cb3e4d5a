# src/smarttask/tasks/task_manager.py

"""
Task lifecycle manager.

Owns the in-memory task list of one user session (most recent first) and is
the only place that mutates it. After every mutation:
- the full list is written to the injected TaskRepo,
- the running-timer listener (if any) gets the current running count.

Operations that name a missing task id are silent no-ops: ids come from UI
state that may be stale by the time the call arrives.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from ..core.errors import EMPTY_TASK_MESSAGE, ValidationError
from ..core.ports import TaskRepo
from .classifier import capitalize, classify
from .task_models import FilterStatus, Task, TaskStats
from .stats import daily_stats, monthly_stats

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
RunningListener = Callable[[int], None]


def utc_now() -> datetime:
    return datetime.now(UTC)


class TaskManager:
    def __init__(
        self,
        repo: TaskRepo,
        tasks: Iterable[Task] = (),
        *,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._repo = repo
        self._tasks: list[Task] = list(tasks)
        self._clock = clock
        self._id_factory = id_factory
        self._on_running_changed: RunningListener | None = None

    # ---- read side ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def filtered(self, status: FilterStatus = FilterStatus.ALL) -> list[Task]:
        if status == FilterStatus.PENDING:
            return [t for t in self._tasks if not t.completed]
        if status == FilterStatus.COMPLETED:
            return [t for t in self._tasks if t.completed]
        return list(self._tasks)

    @property
    def has_completed(self) -> bool:
        return any(t.completed for t in self._tasks)

    @property
    def running_count(self) -> int:
        return sum(1 for t in self._tasks if t.is_timer_running)

    def daily_stats(self) -> TaskStats:
        return daily_stats(self._tasks, self._clock())

    def monthly_stats(self) -> TaskStats:
        return monthly_stats(self._tasks)

    # ---- wiring ----

    def set_running_listener(self, listener: RunningListener | None) -> None:
        self._on_running_changed = listener

    def _commit(self) -> None:
        try:
            self._repo.save_tasks([t.to_record() for t in self._tasks])
        except Exception:
            # Write is fire-and-forget: the in-memory list stays authoritative.
            logger.exception("Failed to persist %d task(s)", len(self._tasks))
        if self._on_running_changed is not None:
            self._on_running_changed(self.running_count)

    # ---- mutations ----

    def create(self, raw_text: str) -> Task:
        text = (raw_text or "").strip()
        if not text:
            raise ValidationError(EMPTY_TASK_MESSAGE, field="text")

        priority, tags = classify(text)
        task = Task(
            id=self._id_factory(),
            text=capitalize(text),
            created_at=self._clock(),
            priority=priority,
            tags=tags,
        )
        self._tasks.insert(0, task)
        logger.info("Task created id=%s priority=%s tags=%s", task.id, priority.value, tags)
        self._commit()
        return task

    def toggle_complete(self, task_id: str) -> None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle_complete: unknown id=%s", task_id)
            return
        task.completed = not task.completed
        if task.completed:
            task.is_timer_running = False
        self._commit()

    def toggle_timer(self, task_id: str) -> None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle_timer: unknown id=%s", task_id)
            return
        task.is_timer_running = not task.is_timer_running
        logger.debug("Timer %s id=%s", "started" if task.is_timer_running else "stopped", task_id)
        self._commit()

    def edit(self, task_id: str, new_text: str) -> None:
        text = (new_text or "").strip()
        if not text:
            return
        task = self.get(task_id)
        if task is None:
            logger.debug("edit: unknown id=%s", task_id)
            return
        task.text = capitalize(text)
        self._commit()

    def delete(self, task_id: str) -> None:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if len(self._tasks) == before:
            logger.debug("delete: unknown id=%s", task_id)
            return
        self._commit()

    def clear_completed(self) -> None:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.completed]
        logger.info("Cleared %d completed task(s)", before - len(self._tasks))
        self._commit()

    def advance_running(self, units: int = 1) -> int:
        """
        Add `units` to every running task in one step.

        Returns how many tasks advanced. Persists only when something changed.
        """
        advanced = 0
        for t in self._tasks:
            if t.is_timer_running:
                t.time_spent += units
                advanced += 1
        if advanced:
            try:
                self._repo.save_tasks([t.to_record() for t in self._tasks])
            except Exception:
                logger.exception("Failed to persist timer tick")
        return advanced
