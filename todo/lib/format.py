from datetime import date, datetime

from todo.core.errors import MalformedDateError
from todo.core.models import Priority, Progress, Task

from . import ansi

__all__ = [
    "format_detail",
    "format_progress",
    "format_reminder",
    "format_status",
    "format_summary",
    "status_symbol",
]

_PRIORITY_COLOR = {
    Priority.HIGH: ansi.coral,
    Priority.MEDIUM: ansi.gold,
    Priority.LOW: ansi.gray,
}


def _overdue(task: Task, now: date | datetime | None) -> bool | None:
    """True/False, or None when the due date cannot be read."""
    try:
        return task.is_overdue(now)
    except MalformedDateError:
        return None


def status_symbol(task: Task, now: date | datetime | None = None) -> str:
    if task.completed:
        return ansi.green("✓")
    overdue = _overdue(task, now)
    if overdue is None:
        return ansi.yellow("?")
    if overdue:
        return ansi.red("!")
    return "□"


def format_status(symbol: str, title: str, task_id: int) -> str:
    return f"{symbol} {title} {ansi.muted(f'[{task_id}]')}"


def format_summary(task: Task, now: date | datetime | None = None) -> str:
    color = _PRIORITY_COLOR[task.priority]
    category = f" {ansi.blue('#' + task.category)}" if task.category else ""
    return (
        f"{task.id:>3}  {status_symbol(task, now)} {task.title}"
        f"  {ansi.muted(task.due_date)}{category}  {color(task.priority.label)}"
    )


def format_detail(task: Task, now: date | datetime | None = None) -> str:
    overdue = _overdue(task, now)
    due_note = ""
    if overdue:
        due_note = " " + ansi.red("(overdue)")
    elif overdue is None and not task.completed:
        due_note = " " + ansi.yellow("(unreadable date)")
    lines = [
        ansi.bold(f"#{task.id} {task.title}"),
        f"  due        {task.due_date}{due_note}",
        f"  priority   {_PRIORITY_COLOR[task.priority](task.priority.label)}",
        f"  completed  {'yes' if task.completed else 'no'}",
        f"  reminder   {task.reminder}",
        f"  category   {task.category}",
    ]
    if task.description:
        lines.append("")
        lines.extend(f"  {ln}" for ln in task.description.splitlines())
    return "\n".join(lines)


def format_progress(progress: Progress) -> str:
    return f"{progress.completed}/{progress.total} tasks completed ({progress.percent}%)"


def format_reminder(title: str, reminder: str) -> str:
    return f"- [{title}] -> {reminder}"
