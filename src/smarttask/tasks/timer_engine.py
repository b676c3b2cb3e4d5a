# src/smarttask/tasks/timer_engine.py

from __future__ import annotations

"""
Timer engine.

Advances time_spent of every running task by one unit per tick. It is an
explicit state machine:

    IDLE --(running count 0 -> >0)--> RUNNING
    RUNNING --(running count >0 -> 0)--> IDLE
    any --shutdown()--> CLOSED

Only the 0 <-> >0 edges change state. Starting a second timer or deleting an
unrelated task while RUNNING leaves the tick loop and its timing base alone.
No loop exists while IDLE.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from enum import StrEnum

logger = logging.getLogger(__name__)

# advance(units) -> number of tasks that advanced
AdvanceFn = Callable[[int], int]


class TimerState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    CLOSED = "closed"


class TimerEngine:
    def __init__(self, advance: AdvanceFn, *, interval_seconds: float = 1.0) -> None:
        self._advance = advance
        self._interval = max(0.001, float(interval_seconds))
        self._state = TimerState.IDLE
        self._runner: asyncio.Task[None] | None = None
        self.ticks = 0

    @property
    def state(self) -> TimerState:
        return self._state

    def sync(self, running_count: int) -> None:
        """Feed the current number of running tasks; transitions happen only on edges."""
        if self._state == TimerState.CLOSED:
            return

        if self._state == TimerState.IDLE and running_count > 0:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.warning("No running event loop; timer stays idle (running=%d)", running_count)
                return
            self._state = TimerState.RUNNING
            self._runner = loop.create_task(self._run(), name="smarttask-timer")
            logger.info("Timer engine started (running=%d)", running_count)
            return

        if self._state == TimerState.RUNNING and running_count == 0:
            self._stop()
            self._state = TimerState.IDLE
            logger.info("Timer engine idle")

    def tick(self) -> int:
        """One advance of every running task. Falls back to IDLE if nothing ran."""
        advanced = self._advance(1)
        self.ticks += 1
        logger.debug("Tick #%d advanced=%d", self.ticks, advanced)
        if advanced == 0 and self._state == TimerState.RUNNING:
            self._state = TimerState.IDLE
            self._runner = None
        return advanced

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        # Fixed timing base: tick n fires at base + n * interval, so slow
        # iterations do not push later ticks back.
        base = loop.time()
        n = 0
        while self._state == TimerState.RUNNING:
            n += 1
            delay = base + n * self._interval - loop.time()
            await asyncio.sleep(max(0.0, delay))
            if self._state != TimerState.RUNNING:
                break
            try:
                self.tick()
            except Exception:
                logger.exception("Timer tick failed")

    def _stop(self) -> None:
        runner, self._runner = self._runner, None
        if runner is not None and not runner.done():
            runner.cancel()

    async def shutdown(self) -> None:
        """Stop ticking for good; later sync() calls are ignored."""
        runner = self._runner
        self._stop()
        self._state = TimerState.CLOSED
        if runner is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await runner
        logger.info("Timer engine closed after %d tick(s)", self.ticks)
