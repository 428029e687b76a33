"""Return-date and deadline notices shown next to a book."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from bookrecords.library.models import Book

from .dates import days_until, format_date

LEVEL_OVERDUE = "overdue"
LEVEL_SOON = "soon"
LEVEL_NORMAL = "normal"


@dataclass(frozen=True)
class DueNotice:
    kind: str  # "return" or "deadline"
    label: str
    date_text: str
    days_left: int
    level: str

    @property
    def is_overdue(self) -> bool:
        return self.level == LEVEL_OVERDUE

    def describe(self) -> str:
        text = f"{self.label} {self.date_text}"
        if not self.is_overdue:
            unit = "day" if self.days_left == 1 else "days"
            text += f" ({self.days_left} {unit} left)"
        return text


def due_notice(
    book: Book,
    today: Optional[date] = None,
    return_warning_days: int = 3,
    deadline_warning_days: int = 5,
) -> Optional[DueNotice]:
    """Notice for the book's return date, or failing that its deadline.

    Raises:
        InvalidDateError: If the stored date cannot be parsed.
    """
    if book.return_date:
        return _notice(
            "return",
            book.return_date,
            today,
            return_warning_days,
            ("Overdue return", "Library return by"),
        )
    if book.deadline:
        return _notice(
            "deadline",
            book.deadline,
            today,
            deadline_warning_days,
            ("Deadline passed", "Reading deadline"),
        )
    return None


def _notice(
    kind: str,
    date_string: str,
    today: Optional[date],
    warning_days: int,
    labels: tuple[str, str],
) -> DueNotice:
    days_left = days_until(date_string, today)
    if days_left < 0:
        level = LEVEL_OVERDUE
    elif days_left <= warning_days:
        level = LEVEL_SOON
    else:
        level = LEVEL_NORMAL
    return DueNotice(
        kind=kind,
        label=labels[0] if level == LEVEL_OVERDUE else labels[1],
        date_text=format_date(date_string),
        days_left=days_left,
        level=level,
    )
