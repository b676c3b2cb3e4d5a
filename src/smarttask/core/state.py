# src/smarttask/core/state.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_manager import TaskManager
from ..tasks.task_models import AppView, FilterStatus, Theme, User
from ..tasks.timer_engine import TimerEngine
from .ports import KeyValueRepo, SessionRepo


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace with the same fields).
    settings: Any

    kv: KeyValueRepo
    session_store: SessionRepo

    theme: Theme = Theme.LIGHT
    view: AppView = AppView.DASHBOARD
    filter: FilterStatus = FilterStatus.ALL

    # Populated only while a user is logged in.
    user: User | None = None
    manager: TaskManager | None = None
    timer: TimerEngine | None = None

    # Transient user-facing error (auto-cleared).
    error: str | None = None
    error_handle: asyncio.TimerHandle | None = None

    # Row number -> task id from the last listing shown to the user.
    # Deleted rows keep their slot as None so later row numbers do not shift.
    last_listing: list[str | None] = field(default_factory=list)

    @property
    def logged_in(self) -> bool:
        return self.user is not None and self.manager is not None
