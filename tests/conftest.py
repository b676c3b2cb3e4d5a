# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from smarttask.cli.bootstrap import create_initial_state
from smarttask.core.session import SessionController
from smarttask.core.state import AppState
from smarttask.tasks.task_manager import TaskManager

from .fakes import FakeTaskRepo, FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="SmartTask Test",
        console_enabled=False,
        color=False,
        # Paths (tmp per test run)
        data_dir=tmp_path,
        db_path=tmp_path / "smarttask.sqlite3",
        # Storage keys
        storage_namespace="smart_task_pro_data",
        session_key="smart_task_pro_session",
        theme_key="smart_task_pro_theme",
        # Tuning (fast ticks for async tests)
        retention_days=30,
        tick_seconds=0.01,
        error_clear_seconds=0.02,
        default_theme="light",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo()


@pytest.fixture()
def manager(repo: FakeTaskRepo, clock: FixedClock) -> TaskManager:
    return TaskManager(repo, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired by the real bootstrap.

    NOTE: We keep the real SQLite store here because its correctness is part of
    what we want to test.
    """
    return create_initial_state(settings=settings)


@pytest.fixture()
def ctl(state: AppState, clock: FixedClock) -> SessionController:
    return SessionController(state, clock=clock)
