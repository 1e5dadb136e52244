import dataclasses
from datetime import date, datetime
from enum import IntEnum
from typing import NamedTuple

from todo.lib.dates import is_overdue

from .errors import ValidationError


class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "str | int") -> "Priority":
        """Accept an ordinal (1-3) or a level name, case-insensitive."""
        raw = str(value).strip()
        if raw.isdigit():
            try:
                return cls(int(raw))
            except ValueError:
                raise ValidationError(f"priority must be 1, 2 or 3, got {raw}") from None
        try:
            return cls[raw.upper()]
        except KeyError:
            raise ValidationError(f"unknown priority '{raw}' (use low, medium or high)") from None


@dataclasses.dataclass(frozen=True)
class Task:
    id: int
    title: str
    due_date: str
    description: str
    reminder: str
    category: str
    priority: Priority
    completed: bool = False

    def mark_done(self) -> "Task":
        if self.completed:
            return self
        return dataclasses.replace(self, completed=True)

    def is_overdue(self, now: date | datetime | None = None) -> bool:
        return is_overdue(self.due_date, self.completed, now)


class Progress(NamedTuple):
    completed: int
    total: int
    percent: int
