# src/smarttask/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.render import render_stats
from ..core.session import SessionController

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts_block(text: str) -> None:
    ts = _ts_local()
    lines = text.splitlines() or [""]
    for i, line in enumerate(lines):
        # keep nice alignment for multi-line command output
        prefix = f"[{ts}] " if i == 0 else " " * (len(ts) + 3)
        print(prefix + line)


def _prompt(ctl: SessionController) -> str:
    user = ctl.state.user
    return f"{user.username}> " if user else "guest> "


def _settle(fut: asyncio.Future[str], value: str | None, exc: BaseException | None) -> None:
    if fut.done():
        return
    if exc is not None:
        fut.set_exception(exc)
    else:
        fut.set_result(value or "")


async def read_line(prompt: str) -> str:
    """
    input() on a daemon thread.

    Cancelling the awaiting task (Ctrl-C under asyncio.run) returns at once;
    the blocked reader thread is abandoned and never joined at shutdown.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def reader() -> None:
        value: str | None = None
        exc: BaseException | None = None
        try:
            value = input(prompt)
        except Exception as e:
            exc = e
        # RuntimeError: loop already closed
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_settle, fut, value, exc)

    threading.Thread(target=reader, name="smarttask-console-input", daemon=True).start()
    return await fut


async def handle_line(ctl: SessionController, line: str) -> str | None:
    """
    One line of console input -> reply text.

    Slash commands go to the registry; any other text is a new task.
    """
    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    reply = await command_registry.handle(ctl, line, emit=emit)
    if reply is not None:
        return reply

    if ctl.state.manager is None:
        return "You are not logged in. Use /login <username>."
    task = ctl.add_task(line)
    if task is None:
        return ctl.state.error
    title, stats = ctl.active_stats()
    tags = ", ".join(task.tags) if task.tags else "none"
    return (
        f"Added: {task.text} [priority: {task.priority.value}, tags: {tags}]\n"
        + render_stats(title, stats)
    )


async def run_console_loop(ctl: SessionController) -> None:
    """
    Interactive REPL.

    input() runs on a daemon thread so the event loop keeps ticking timers
    while the prompt waits; every mutation still happens on the loop thread.
    """
    settings = ctl.state.settings
    app_name = str(getattr(settings, "app_name", "SmartTask Pro"))
    logger.info("Console connector started (user=%s).", ctl.state.user.username if ctl.state.user else None)
    _print_ts_block(
        f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit."
    )
    if ctl.state.user is None:
        _print_ts_block("Log in first: /login <username>")
    else:
        _print_ts_block(f"Welcome back, {ctl.state.user.username}.")

    while True:
        try:
            line = (await read_line(_prompt(ctl))).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except asyncio.CancelledError:
            logger.info("Console cancelled, exiting.")
            print()
            raise

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await handle_line(ctl, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts_block(reply)
        sys.stdout.flush()

    logger.info("Console connector finished.")
