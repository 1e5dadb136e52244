import logging

from todo.core.errors import ParseError
from todo.core.models import Priority, Task

logger = logging.getLogger(__name__)

DELIMITER = "|"
FIELD_COUNT = 8

_TEXT_FIELDS = ("title", "due_date", "description", "reminder", "category")


def serialize_task(task: Task) -> str:
    """
    Encodes a Task as a single delimited line (no trailing newline).
    Field order: id|title|due_date|description|reminder|category|priority|completed
    """
    corrupt = [f for f in _TEXT_FIELDS if DELIMITER in getattr(task, f)]
    if corrupt:
        logger.warning(
            "task %s has '%s' in %s; the record will not read back cleanly",
            task.id,
            DELIMITER,
            ", ".join(corrupt),
        )
    return DELIMITER.join(
        [
            str(task.id),
            task.title,
            task.due_date,
            task.description,
            task.reminder,
            task.category,
            str(task.priority.value),
            "1" if task.completed else "0",
        ]
    )


def _parse_int(raw: str, field: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ParseError(f"{field} is not an integer: '{raw}'") from None


def deserialize_task(line: str) -> Task:
    """
    Decodes one persisted line into a Task.
    Fields past the eighth are ignored; fewer than eight is an error.
    """
    fields = line.rstrip("\r\n").split(DELIMITER)
    if len(fields) < FIELD_COUNT:
        raise ParseError(f"expected {FIELD_COUNT} fields, got {len(fields)}")

    task_id = _parse_int(fields[0], "id")
    priority_raw = _parse_int(fields[6], "priority")
    try:
        priority = Priority(priority_raw)
    except ValueError:
        raise ParseError(f"priority must be 1, 2 or 3, got {priority_raw}") from None

    return Task(
        id=task_id,
        title=fields[1],
        due_date=fields[2],
        description=fields[3],
        reminder=fields[4],
        category=fields[5],
        priority=priority,
        completed=_parse_int(fields[7], "completed") != 0,
    )
