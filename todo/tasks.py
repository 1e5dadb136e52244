from collections.abc import Iterator
from contextlib import contextmanager

from fncli import UsageError, cli

from . import config
from .core.errors import TodoError
from .core.models import Priority, Task
from .lib import ansi
from .lib.dates import parse_due_date
from .lib.errors import echo, exit_error
from .lib.format import (
    format_detail,
    format_progress,
    format_reminder,
    format_status,
    format_summary,
    status_symbol,
)
from .store import TaskStore, open_store

__all__ = ["dash"]


@contextmanager
def _store(readonly: bool = False) -> Iterator[TaskStore]:
    try:
        with open_store(readonly=readonly) as store:
            yield store
    except TodoError as e:
        exit_error(f"Error: {e}")


def _print_tasks(tasks: list[Task], empty: str) -> None:
    if not tasks:
        echo(ansi.muted(empty))
        return
    for t in tasks:
        echo(format_summary(t))


def _print_reminders(store: TaskStore) -> None:
    reminders = store.upcoming_reminders()
    if not reminders:
        return
    echo(ansi.bold("reminders"))
    for title, reminder in reminders:
        echo(format_reminder(title, reminder))
    echo()


# ── cli ──────────────────────────────────────────────────────────────────────


@cli("todo")
def dash() -> None:
    """Show reminders and all tasks"""
    with _store(readonly=True) as store:
        _print_reminders(store)
        _print_tasks(store.list_all(), "no tasks")


@cli(
    "todo",
    flags={
        "due": ["-d", "--due"],
        "description": ["--desc", "--description"],
        "reminder": ["-r", "--reminder"],
        "category": ["-c", "--category"],
        "priority": ["-p", "--priority"],
    },
    help={"due": "today, tomorrow, day name, or YYYY-MM-DD", "priority": "1-3 or low/medium/high"},
    required=["due"],
)
def add(
    title: list[str],
    due: str | None = None,
    description: str = "",
    reminder: str = "",
    category: str = "",
    priority: str = "medium",
) -> None:
    """Add a task"""
    title_str = " ".join(title) if title else ""
    if not title_str:
        raise UsageError("Usage: todo add <title> --due <date>")
    due_date = parse_due_date(due or "")
    if due_date is None:
        exit_error(f"Error: cannot read due date '{due}'")
    try:
        level = Priority.parse(priority)
    except TodoError as e:
        exit_error(f"Error: {e}")
    with _store() as store:
        task_id = store.add_task(title_str, due_date, description, reminder, category, level)
    echo(format_status("□", title_str, task_id))


@cli("todo")
def ls(done: bool = False, pending: bool = False) -> None:
    """List tasks (all, --done, or --pending)"""
    if done and pending:
        raise UsageError("--done and --pending are exclusive")
    with _store(readonly=True) as store:
        if done or pending:
            tasks = store.filter_by_completion(done)
            empty = "no completed tasks" if done else "no pending tasks"
        else:
            tasks = store.list_all()
            empty = "no tasks"
    _print_tasks(tasks, empty)


@cli("todo")
def show(task_id: int) -> None:
    """Show full task detail"""
    with _store(readonly=True) as store:
        task = store.get_details(task_id)
    echo(format_detail(task))


@cli("todo")
def done(task_id: int) -> None:
    """Mark task as done"""
    with _store() as store:
        task = store.mark_done(task_id)
    echo(format_status(status_symbol(task), task.title, task.id))


@cli("todo")
def rm(task_id: int) -> None:
    """Delete task"""
    with _store() as store:
        task = store.delete(task_id)
    echo(f"✗ {task.title} {ansi.muted(f'[{task.id}]')}")


@cli("todo")
def progress() -> None:
    """Show completion progress"""
    with _store(readonly=True) as store:
        echo(format_progress(store.progress()))


@cli("todo")
def reminders() -> None:
    """Show reminders for pending tasks"""
    with _store(readonly=True) as store:
        pending = store.upcoming_reminders()
    if not pending:
        echo(ansi.muted("no reminders"))
        return
    for title, reminder in pending:
        echo(format_reminder(title, reminder))


@cli("todo")
def search(keyword: str) -> None:
    """Find tasks by title or category (case-sensitive)"""
    with _store(readonly=True) as store:
        matches = store.search(keyword)
    _print_tasks(matches, f"no tasks matching '{keyword}'")


@cli("todo", flags={"by": ["-b", "--by"]}, help={"by": "due or priority"})
def sort(by: str = "due") -> None:
    """Reorder tasks by due date or priority"""
    if by not in ("due", "priority"):
        raise UsageError(f"unknown sort key: {by}")
    with _store() as store:
        if by == "due":
            store.sort_by_due_date()
        else:
            store.sort_by_priority()
        tasks = store.list_all()
    _print_tasks(tasks, "no tasks")


@cli("todo config", name="file", flags={"path": []})
def config_file(path: str | None = None) -> None:
    """Show or set the task file location"""
    if path:
        config.set_tasks_path(path)
    echo(str(config.get_tasks_path()))
