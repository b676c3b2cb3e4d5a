# src/smarttask/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.errors import ValidationError
from ..core.session import SessionController
from ..tasks.task_models import AppView, FilterStatus
from .render import render_records, render_stats, render_task_list

CommandEmitter = Callable[[str], None]
CommandResult = str | Awaitable[str]
CommandHandler2 = Callable[[SessionController, list[str]], CommandResult]
CommandHandler3 = Callable[[SessionController, list[str], CommandEmitter | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "You are not logged in. Use /login <username>."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        ctl: SessionController,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(ctl, args, emit)
        else:
            result = cast(CommandHandler2, handler)(ctl, args)

        if inspect.isawaitable(result):
            return await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text adds a task)")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_ref(ctl: SessionController, ref: str) -> str | None:
    """
    Row number from the last listing, or a unique id prefix -> task id.
    """
    st = ctl.state
    manager = st.manager
    if manager is None or not ref:
        return None

    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(st.last_listing):
            return st.last_listing[n - 1]
        return None

    matches = [t.id for t in manager.tasks if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def _listing(ctl: SessionController, status: FilterStatus | None = None) -> str:
    st = ctl.state
    assert st.manager is not None
    if status is not None:
        st.filter = status
    tasks = st.manager.filtered(st.filter)
    st.last_listing = [t.id for t in tasks]
    color = bool(getattr(st.settings, "color", False)) and sys.stdout.isatty()
    header = f"{st.user.username if st.user else ''} | {st.filter.value}"
    return header + "\n" + render_task_list(tasks, theme=st.theme, color=color)


def cmd_help(ctl: SessionController, args: list[str]) -> str:
    return registry.build_help()


def cmd_login(ctl: SessionController, args: list[str]) -> str:
    if not args:
        return "Usage: /login <username>"
    try:
        user = ctl.login(" ".join(args))
    except ValidationError as e:
        return e.message
    except RuntimeError as e:
        return str(e)
    assert ctl.state.manager is not None
    return f"Welcome, {user.username}. {len(ctl.state.manager.tasks)} task(s) in your window."


async def cmd_logout(ctl: SessionController, args: list[str]) -> str:
    if ctl.state.user is None:
        return NOT_LOGGED_IN
    name = ctl.state.user.username
    await ctl.logout()
    return f"Logged out {name}."


def cmd_whoami(ctl: SessionController, args: list[str]) -> str:
    user = ctl.state.user
    if user is None:
        return NOT_LOGGED_IN
    return f"{user.username} (id={user.id})"


def cmd_add(ctl: SessionController, args: list[str]) -> str:
    if ctl.state.manager is None:
        return NOT_LOGGED_IN
    task = ctl.add_task(" ".join(args))
    if task is None:
        return ctl.state.error or "Task not added."
    tags = ", ".join(task.tags) if task.tags else "none"
    return f"Added: {task.text} [priority: {task.priority.value}, tags: {tags}]"


def cmd_list(ctl: SessionController, args: list[str]) -> str:
    if ctl.state.manager is None:
        return NOT_LOGGED_IN
    status: FilterStatus | None = None
    if args:
        wanted = args[0].lower()
        for s in FilterStatus:
            if s.value.lower() == wanted:
                status = s
                break
        else:
            return "Usage: /list [all|pending|completed]"
    return _listing(ctl, status)


def _with_task(ctl: SessionController, args: list[str], usage: str) -> tuple[str | None, str | None]:
    """Returns (task_id, error_reply)."""
    if ctl.state.manager is None:
        return None, NOT_LOGGED_IN
    if not args:
        return None, usage
    task_id = resolve_task_ref(ctl, args[0])
    if task_id is None:
        return None, f"No task matches '{args[0]}'. Use /list to see row numbers."
    return task_id, None


def cmd_done(ctl: SessionController, args: list[str]) -> str:
    task_id, err = _with_task(ctl, args, "Usage: /done <n>")
    if err:
        return err
    assert ctl.state.manager is not None and task_id is not None
    ctl.state.manager.toggle_complete(task_id)
    task = ctl.state.manager.get(task_id)
    if task is None:
        return "Task is gone."
    return f"{'Completed' if task.completed else 'Reopened'}: {task.text}"


def cmd_timer(ctl: SessionController, args: list[str]) -> str:
    task_id, err = _with_task(ctl, args, "Usage: /timer <n>")
    if err:
        return err
    manager = ctl.state.manager
    assert manager is not None and task_id is not None
    task = manager.get(task_id)
    if task is None:
        return "Task is gone."
    # Completed rows have no timer control; only a stray running timer may be stopped.
    if task.completed and not task.is_timer_running:
        return "Task is completed; reopen it with /done before tracking time."
    manager.toggle_timer(task_id)
    return f"Timer {'started' if task.is_timer_running else 'stopped'}: {task.text}"


def cmd_edit(ctl: SessionController, args: list[str]) -> str:
    task_id, err = _with_task(ctl, args, "Usage: /edit <n> <new text>")
    if err:
        return err
    manager = ctl.state.manager
    assert manager is not None and task_id is not None
    new_text = " ".join(args[1:]).strip()
    if not new_text:
        return "Task text cannot be empty; kept the previous text."
    manager.edit(task_id, new_text)
    task = manager.get(task_id)
    return f"Edited: {task.text}" if task else "Task is gone."


def cmd_delete(ctl: SessionController, args: list[str]) -> str:
    task_id, err = _with_task(ctl, args, "Usage: /del <n>")
    if err:
        return err
    manager = ctl.state.manager
    assert manager is not None and task_id is not None
    task = manager.get(task_id)
    manager.delete(task_id)
    ctl.state.last_listing = [None if i == task_id else i for i in ctl.state.last_listing]
    return f"Deleted: {task.text}" if task else "Task is gone."


def cmd_clear(ctl: SessionController, args: list[str]) -> str:
    manager = ctl.state.manager
    if manager is None:
        return NOT_LOGGED_IN
    if not manager.has_completed:
        return "No completed tasks to clear."
    before = len(manager.tasks)
    manager.clear_completed()
    ctl.state.last_listing = []
    return f"Cleared {before - len(manager.tasks)} completed task(s)."


def cmd_stats(ctl: SessionController, args: list[str]) -> str:
    manager = ctl.state.manager
    if manager is None:
        return NOT_LOGGED_IN
    if not args:
        title, stats = ctl.active_stats()
        return render_stats(title, stats)
    sub = args[0].lower()
    if sub == "daily":
        return render_stats("Daily Window Insights", manager.daily_stats())
    if sub == "monthly":
        return render_stats("Monthly Window Insights", manager.monthly_stats())
    return "Usage: /stats [daily|monthly]"


def cmd_view(ctl: SessionController, args: list[str]) -> str:
    st = ctl.state
    if st.manager is None:
        return NOT_LOGGED_IN
    if args:
        wanted = args[0].lower()
        for v in AppView:
            if v.value.lower() == wanted:
                st.view = v
                break
        else:
            return "Usage: /view [dashboard|records]"
    title, stats = ctl.active_stats()
    if st.view == AppView.RECORDS:
        return render_stats(title, stats) + "\n" + render_records(st.manager.tasks)
    return render_stats(title, stats) + "\n" + _listing(ctl)


def cmd_records(ctl: SessionController, args: list[str]) -> str:
    return cmd_view(ctl, ["records"])


def cmd_theme(
    ctl: SessionController,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /theme        -> toggle
    /theme dark   -> set dark
    /theme light  -> set light
    """
    if not args:
        theme = ctl.toggle_theme()
    else:
        try:
            theme = ctl.set_theme(args[0].lower())
        except ValueError:
            return "Usage: /theme [light|dark]"
    if emit:
        with contextlib.suppress(Exception):
            emit(f"[THEME] {theme.value}")
    logger.debug("Theme set to %s", theme.value)
    return f"Theme is now {theme.value}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("login", cmd_login, help_text="Log in: /login <username>.")
registry.register("logout", cmd_logout, help_text="Log out and stop all timers.")
registry.register("whoami", cmd_whoami, help_text="Show the logged-in user.")
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register(
    "list", cmd_list, help_text="List tasks: /list [all|pending|completed].", aliases=["ls"]
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["x"])
registry.register("timer", cmd_timer, help_text="Start/stop the timer: /timer <n>.", aliases=["t"])
registry.register("edit", cmd_edit, help_text="Edit text: /edit <n> <new text>.")
registry.register("del", cmd_delete, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("stats", cmd_stats, help_text="Show stats: /stats [daily|monthly].")
registry.register("view", cmd_view, help_text="Switch view: /view [dashboard|records].")
registry.register("records", cmd_records, help_text="Records view (monthly window).")
registry.register("theme", cmd_theme, help_text="Toggle or set theme: /theme [light|dark].")
