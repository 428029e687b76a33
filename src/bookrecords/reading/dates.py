"""Calendar date helpers for return dates, deadlines and display."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from bookrecords.errors import InvalidDateError

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Accepted besides ISO-8601, including what format_date() produces
_FALLBACK_FORMATS = ("%b %d, %Y", "%B %d, %Y", "%Y/%m/%d")


def parse_date(value: object, operation: str = "parse_date") -> date:
    """Parse a date or date-time string to a local calendar date.

    Date-times carrying a UTC offset are converted to local time first, so
    ``2025-10-10T23:30:00Z`` lands on whatever day that is locally.

    Raises:
        InvalidDateError: If ``value`` is not a non-empty, parsable string.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(operation, value)
    text = value.strip()

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
        return parsed.date()

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidDateError(operation, value)


def is_valid_date(value: object) -> bool:
    try:
        parse_date(value)
    except InvalidDateError:
        return False
    return True


def _today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def days_until(date_string: str, today: Optional[date] = None) -> int:
    """Signed number of calendar days from ``today`` to the date (0 = today)."""
    target = parse_date(date_string, "days_until")
    return (target - _today(today)).days


def is_overdue(date_string: str, today: Optional[date] = None) -> bool:
    """True if the date is strictly before ``today``."""
    target = parse_date(date_string, "is_overdue")
    return target < _today(today)


def format_date(date_string: str) -> str:
    """Render as ``"Oct 10, 2025"`` independent of the process locale."""
    d = parse_date(date_string, "format_date")
    return f"{MONTH_ABBREVIATIONS[d.month - 1]} {d.day}, {d.year}"
