"""Daily reading goal for books with a deadline."""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from bookrecords.errors import InvalidDateError
from bookrecords.library.models import Book, DailyGoal

from .dates import parse_date


def calculate_daily_goal(book: Book, today: Optional[date] = None) -> Optional[DailyGoal]:
    """Pages per day needed to finish ``book`` by its deadline.

    Returns None when no goal applies: no deadline, an unparsable deadline,
    no (or zero) total pages, or no current page. A current page of 0 counts.
    Pages per day always round up, so following the goal never leaves the
    reader short on the deadline.
    """
    if not book.deadline or not book.total_pages or book.current_page is None:
        return None
    try:
        deadline = parse_date(book.deadline, "calculate_daily_goal")
    except InvalidDateError:
        return None

    today = today if today is not None else date.today()
    days_remaining = (deadline - today).days
    pages_remaining = max(0, book.total_pages - book.current_page)

    if days_remaining <= 0 or pages_remaining == 0:
        return DailyGoal(
            pages_per_day=0,
            days_remaining=max(0, days_remaining),
            total_pages_remaining=pages_remaining,
        )

    return DailyGoal(
        pages_per_day=math.ceil(pages_remaining / days_remaining),
        days_remaining=days_remaining,
        total_pages_remaining=pages_remaining,
    )
