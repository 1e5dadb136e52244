import logging
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import fncli
import pytest

import todo.tasks  # noqa: F401  registers the @cli commands
from todo import config
from todo.core.models import Priority
from todo.lib import ansi, clock
from todo.store import TaskStore

FIXED_NOW = datetime(2024, 6, 15, 10, 30)


class FnCLIRunner:
    def invoke(self, args: list[str]):
        return fncli.invoke(["todo", *args])


@pytest.fixture
def tmp_todo_dir(tmp_path: Path, monkeypatch) -> Iterator[Path]:
    monkeypatch.setattr(config, "TODO_DIR", tmp_path)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.setattr(config, "TASKS_PATH", tmp_path / "tasks.txt")
    monkeypatch.setattr(config, "LOG_PATH", tmp_path / "todo.log")
    monkeypatch.setattr(fncli, "_TIMING_LOG", tmp_path / "cli_timings.jsonl", raising=False)
    config.Config.reset()
    ansi.use(ansi.PLAIN)
    yield tmp_path
    ansi.use(ansi.DEFAULT)
    config.Config.reset()


@pytest.fixture
def fixed_now(monkeypatch) -> datetime:
    monkeypatch.setattr(clock, "now", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def runner(tmp_todo_dir) -> FnCLIRunner:
    return FnCLIRunner()


@pytest.fixture
def store() -> TaskStore:
    s = TaskStore()
    s.add_task("Work report", "2024-03-01", "quarterly numbers", "friday 9am", "x", Priority.HIGH)
    s.add_task("Groceries", "2024-01-15", "", "", "Work", Priority.LOW)
    s.add_task("Gym", "2024-02-20", "leg day", "bring towel", "Fitness", Priority.MEDIUM)
    return s


@pytest.fixture
def todo_logger():
    logger = logging.getLogger("todo")
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    for h in saved[2]:
        logger.addHandler(h)
