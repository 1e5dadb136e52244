import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from . import config
from .core.errors import NotFoundError, ParseError, StorageError
from .core.models import Priority, Progress, Task
from .lib.converters import deserialize_task, serialize_task

__all__ = ["TaskStore", "open_store"]

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory ordered task list backed by a flat text file.

    Order is insertion order until one of the sort operations reorders it.
    `id_counter` is the last id handed out; deleted ids are never reused.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._id_counter = 0

    @property
    def id_counter(self) -> int:
        return self._id_counter

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def _index_of(self, task_id: int) -> int:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(task_id)

    # ---- mutation ----

    def add_task(
        self,
        title: str,
        due_date: str,
        description: str,
        reminder: str,
        category: str,
        priority: Priority,
    ) -> int:
        self._id_counter += 1
        task = Task(
            id=self._id_counter,
            title=title,
            due_date=due_date,
            description=description,
            reminder=reminder,
            category=category,
            priority=Priority(priority),
        )
        self._tasks.append(task)
        logger.debug("task added id=%s title=%r due=%s", task.id, title, due_date)
        return task.id

    def mark_done(self, task_id: int) -> Task:
        i = self._index_of(task_id)
        done = self._tasks[i].mark_done()
        self._tasks[i] = done
        logger.debug("task done id=%s", task_id)
        return done

    def delete(self, task_id: int) -> Task:
        removed = self._tasks.pop(self._index_of(task_id))
        logger.debug("task deleted id=%s", task_id)
        return removed

    def sort_by_due_date(self) -> None:
        # text order; correct chronologically only for zero-padded dates
        self._tasks.sort(key=lambda t: t.due_date)
        logger.debug("sorted %d tasks by due date", len(self._tasks))

    def sort_by_priority(self) -> None:
        self._tasks.sort(key=lambda t: t.priority.value)
        logger.debug("sorted %d tasks by priority", len(self._tasks))

    # ---- queries ----

    def list_all(self) -> list[Task]:
        return list(self._tasks)

    def get_details(self, task_id: int) -> Task:
        return self._tasks[self._index_of(task_id)]

    def progress(self) -> Progress:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        percent = completed * 100 // total if total > 0 else 0
        return Progress(completed, total, percent)

    def upcoming_reminders(self) -> list[tuple[str, str]]:
        return [(t.title, t.reminder) for t in self._tasks if not t.completed and t.reminder]

    def search(self, keyword: str) -> list[Task]:
        return [t for t in self._tasks if keyword in t.title or keyword in t.category]

    def filter_by_completion(self, completed: bool) -> list[Task]:
        return [t for t in self._tasks if t.completed == completed]

    # ---- persistence ----

    def save(self, path: Path) -> None:
        """Write one line per task. Encoding happens before the file is touched."""
        path = Path(path)
        text = "".join(serialize_task(task) + "\n" for task in self._tasks)
        try:
            payload = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise StorageError(f"cannot encode tasks for {path}: {e.reason}") from e
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as e:
            raise StorageError(f"cannot write {path}: {e}") from e
        logger.info("saved %d tasks to %s", len(self._tasks), path)

    def load(self, path: Path) -> None:
        """
        Replace the store's contents with the tasks in `path`.
        The file is fully parsed before anything in memory changes.
        Records end at "\\n" only; a stray "\\r" inside a field is data.
        """
        path = Path(path)
        loaded: list[Task] = []
        try:
            with path.open("rb") as f:
                for line_no, raw in enumerate(f, start=1):
                    try:
                        line = raw.decode("utf-8")
                    except UnicodeDecodeError as e:
                        raise ParseError(f"not valid UTF-8: {e.reason}", line_no=line_no) from e
                    if not line.strip():
                        continue
                    try:
                        loaded.append(deserialize_task(line))
                    except ParseError as e:
                        raise ParseError(str(e), line_no=line_no) from e
        except OSError as e:
            raise StorageError(f"cannot read {path}: {e}") from e

        self._tasks = loaded
        self._id_counter = max((t.id for t in loaded), default=0)
        logger.info("loaded %d tasks from %s (last id %d)", len(loaded), path, self._id_counter)


@contextmanager
def open_store(path: Path | None = None, readonly: bool = False):
    """Load the task file (missing file = empty store), yield, save on success."""
    path = path if path else config.get_tasks_path()
    store = TaskStore()
    if path.exists():
        store.load(path)
    else:
        logger.info("no task file at %s, starting empty", path)
    yield store
    if not readonly:
        store.save(path)
