# src/smarttask/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores the saved session, then runs
the console REPL on an asyncio loop (the timer engine ticks on the same loop).
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_controller
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    # Built inside the loop so restored running timers can start ticking.
    ctl = create_controller(settings=settings)
    try:
        if settings.console_enabled:
            await run_console_loop(ctl)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        try:
            await ctl.shutdown()
        except Exception:
            logger.exception("Shutdown failed.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
