# src/smarttask/cli/render.py

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from ..tasks.task_models import Priority, Task, TaskStats, Theme

# ANSI colors per theme; dark terminals get the bright variants.
_PRIORITY_COLORS: dict[Theme, dict[Priority, str]] = {
    Theme.LIGHT: {Priority.HIGH: "31", Priority.MEDIUM: "33", Priority.LOW: "32"},
    Theme.DARK: {Priority.HIGH: "91", Priority.MEDIUM: "93", Priority.LOW: "92"},
}
_DIM = "2"


def paint(text: str, code: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"\033[{code}m{text}\033[0m"


def format_seconds(sec: int) -> str:
    h = sec // 3600
    m = (sec % 3600) // 60
    s = sec % 60
    return f"{h}:{m:02d}:{s:02d}"


def render_task_row(index: int, task: Task, *, theme: Theme = Theme.LIGHT, color: bool = False) -> str:
    box = "[x]" if task.completed else "[ ]"
    prio = paint(f"{task.priority.value:<6}", _PRIORITY_COLORS[theme][task.priority], color)
    timer = format_seconds(task.time_spent)
    if task.is_timer_running:
        timer += " *"
    tags = f"  #{' #'.join(task.tags)}" if task.tags else ""
    text = paint(task.text, _DIM, color) if task.completed else task.text
    return f"{index:>3}. {box} {prio} {text}{tags}  ({timer})"


def render_task_list(tasks: Sequence[Task], *, theme: Theme = Theme.LIGHT, color: bool = False) -> str:
    if not tasks:
        return "No tasks found. Add some tasks to get started!"
    return "\n".join(
        render_task_row(i, t, theme=theme, color=color) for i, t in enumerate(tasks, start=1)
    )


def render_stats(title: str, stats: TaskStats) -> str:
    return f"{title}: total={stats.total} pending={stats.pending} completed={stats.completed}"


def render_records(tasks: Sequence[Task]) -> str:
    """Tasks grouped by local creation day (newest first) with per-day time and tag totals."""
    if not tasks:
        return "No records in the retention window."

    by_day: dict[str, list[Task]] = defaultdict(list)
    for t in tasks:
        by_day[t.created_at.astimezone().date().isoformat()].append(t)

    lines: list[str] = []
    for day in sorted(by_day, reverse=True):
        items = by_day[day]
        done = sum(1 for t in items if t.completed)
        spent = sum(t.time_spent for t in items)
        lines.append(f"{day}: {done}/{len(items)} done, tracked {format_seconds(spent)}")
        for t in items:
            mark = "x" if t.completed else " "
            lines.append(f"    [{mark}] {t.text} ({t.priority.value})")

    tag_counts: dict[str, int] = defaultdict(int)
    for t in tasks:
        for tag in t.tags:
            tag_counts[tag] += 1
    if tag_counts:
        summary = ", ".join(f"{tag}={n}" for tag, n in sorted(tag_counts.items()))
        lines.append(f"Categories: {summary}")
    return "\n".join(lines)
