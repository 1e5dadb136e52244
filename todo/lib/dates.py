from datetime import date, datetime, time, timedelta

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from todo.core.errors import MalformedDateError

from . import clock

_WEEKDAYS = {"mon": 0, "tue": 1, "wed": 2, "thu": 3, "fri": 4, "sat": 5, "sun": 6}
_DAY_ALIASES = {
    "monday": "mon",
    "tuesday": "tue",
    "wednesday": "wed",
    "thursday": "thu",
    "friday": "fri",
    "saturday": "sat",
    "sunday": "sun",
}


def parse_due_day(text: str) -> date:
    """Parse a stored YYYY-MM-DD due date into a calendar day.

    Zero padding is optional on read ("2024-3-5" is accepted). Anything that is
    not three integer fields forming a real date raises MalformedDateError.
    """
    parts = text.strip().split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise MalformedDateError(text)
    year, month, day = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError:
        raise MalformedDateError(text) from None


def _as_moment(now: date | datetime | None) -> datetime:
    if now is None:
        return clock.now()
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time.min)


def is_overdue(due_date: str, completed: bool, now: date | datetime | None = None) -> bool:
    """Pending and the start of the due day has already passed.

    A bare date for `now` means midnight of that day, so a task due that same
    day is not yet overdue; any later moment on the due day is.
    """
    if completed:
        return False
    return datetime.combine(parse_due_day(due_date), time.min) < _as_moment(now)


def parse_due_date(due_str: str) -> str | None:
    """Parses a due date string (e.g., 'today', 'tomorrow', 'mon', 'YYYY-MM-DD')."""
    due_str_lower = due_str.strip().lower()
    if not due_str_lower:
        return None
    today = clock.today()

    if due_str_lower == "today":
        return today.isoformat()
    if due_str_lower == "yesterday":
        return (today - timedelta(days=1)).isoformat()
    if due_str_lower == "tomorrow":
        return (today + timedelta(days=1)).isoformat()
    due_str_lower = _DAY_ALIASES.get(due_str_lower, due_str_lower)
    if due_str_lower in _WEEKDAYS:
        days_ahead = (_WEEKDAYS[due_str_lower] - today.weekday() + 7) % 7
        if days_ahead == 0:
            days_ahead = 7
        return (today + timedelta(days=days_ahead)).isoformat()
    try:
        return (
            dateutil_parser.parse(due_str, default=datetime(today.year, today.month, today.day))
            .date()
            .isoformat()
        )
    except (ParserError, ValueError, OverflowError):
        return None
