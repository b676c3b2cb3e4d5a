# src/smarttask/core/errors.py

from __future__ import annotations


class ValidationError(ValueError):
    """User input rejected before any mutation happened (e.g. empty task text)."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


EMPTY_TASK_MESSAGE = "Please enter a valid task description."
