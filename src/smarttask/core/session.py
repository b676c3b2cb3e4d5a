# src/smarttask/core/session.py

"""
Session controller.

Owns the lifecycle around AppState:
- restore(): theme + saved user at startup, then load that user's tasks
- login()/logout(): open or tear down a user session
- shutdown(): stop the timer engine when the app exits

Loading a user's tasks always goes through the retention filter before the
TaskManager sees them.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

from ..tasks.retention import filter_retained
from ..tasks.task_manager import Clock, TaskManager, utc_now
from ..tasks.task_models import AppView, Task, TaskStats, Theme, User
from ..tasks.task_store import UserTaskRepo, decode_tasks
from ..tasks.timer_engine import TimerEngine
from .errors import ValidationError
from .state import AppState

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(self, state: AppState, *, clock: Clock = utc_now) -> None:
        self.state = state
        self._clock = clock

    # ---- startup / session ----

    def restore(self) -> User | None:
        st = self.state
        saved_theme = st.session_store.load_theme()
        st.theme = saved_theme or Theme(getattr(st.settings, "default_theme", "light"))

        user = st.session_store.load_user()
        if user is not None:
            logger.info("Restoring session for user=%s", user.username)
            self._open(user)
        return user

    def login(self, username: str) -> User:
        name = (username or "").strip()
        if not name:
            raise ValidationError("Please enter a username.", field="username")
        if self.state.user is not None:
            if self.state.user.username == name:
                return self.state.user
            raise RuntimeError(f"Already logged in as {self.state.user.username}; /logout first.")

        user = User(username=name, id=str(uuid.uuid4()))
        self.state.session_store.save_user(user)
        self._open(user)
        logger.info("User logged in: %s", name)
        return user

    async def logout(self) -> None:
        st = self.state
        if st.user is None:
            return
        name = st.user.username
        await self._close()
        st.session_store.clear_user()
        st.view = AppView.DASHBOARD
        logger.info("User logged out: %s", name)

    async def shutdown(self) -> None:
        """App exit: stop background work but keep the saved session."""
        await self._close()

    def _open(self, user: User) -> None:
        st = self.state
        repo = UserTaskRepo(
            st.kv,
            user.username,
            namespace=getattr(st.settings, "storage_namespace", "smart_task_pro_data"),
        )
        loaded = decode_tasks(repo.load_tasks())
        days = int(getattr(st.settings, "retention_days", 30))
        kept = filter_retained(loaded, self._clock(), days=days)

        manager = TaskManager(repo, kept, clock=self._clock)
        if len(kept) != len(loaded):
            repo.save_tasks([t.to_record() for t in kept])

        timer = TimerEngine(
            manager.advance_running,
            interval_seconds=float(getattr(st.settings, "tick_seconds", 1.0)),
        )
        manager.set_running_listener(timer.sync)

        st.user = user
        st.manager = manager
        st.timer = timer
        st.last_listing = []
        logger.info("Loaded %d task(s) for user=%s", len(kept), user.username)

        # Timers that were running at last save keep running.
        timer.sync(manager.running_count)

    async def _close(self) -> None:
        st = self.state
        if st.timer is not None:
            await st.timer.shutdown()
        if st.manager is not None:
            st.manager.set_running_listener(None)
        self.clear_error()
        st.user = None
        st.manager = None
        st.timer = None
        st.last_listing = []

    # ---- task entry ----

    def add_task(self, raw_text: str) -> Task | None:
        """Create a task; on empty input record a transient error instead."""
        manager = self.state.manager
        if manager is None:
            raise RuntimeError("No user session")
        try:
            task = manager.create(raw_text)
        except ValidationError as e:
            self.report_error(e.message)
            return None
        self.clear_error()
        return task

    # ---- transient error ----

    def report_error(self, message: str) -> None:
        st = self.state
        self.clear_error()
        st.error = message
        delay = float(getattr(st.settings, "error_clear_seconds", 3.0))
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the message stays until the next successful action.
            return
        st.error_handle = loop.call_later(delay, self._expire_error, message)

    def _expire_error(self, message: str) -> None:
        if self.state.error == message:
            self.state.error = None
        self.state.error_handle = None

    def clear_error(self) -> None:
        st = self.state
        if st.error_handle is not None:
            st.error_handle.cancel()
            st.error_handle = None
        st.error = None

    # ---- presentation helpers ----

    def toggle_theme(self) -> Theme:
        theme = Theme.LIGHT if self.state.theme == Theme.DARK else Theme.DARK
        return self.set_theme(theme)

    def set_theme(self, theme: Theme | str) -> Theme:
        self.state.theme = Theme(theme)
        self.state.session_store.save_theme(self.state.theme)
        return self.state.theme

    def active_stats(self) -> tuple[str, TaskStats]:
        manager = self.state.manager
        if manager is None:
            raise RuntimeError("No user session")
        if self.state.view == AppView.DASHBOARD:
            return "Daily Window Insights", manager.daily_stats()
        return "Monthly Window Insights", manager.monthly_stats()
