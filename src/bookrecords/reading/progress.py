"""Reading progress as a percentage."""

from __future__ import annotations

import math
from typing import Optional

from bookrecords.library.models import Book


def calculate_progress(total_pages: Optional[int], current_page: Optional[int]) -> int:
    """Completion percentage in [0, 100], never failing on odd page counts."""
    if not total_pages or total_pages <= 0:
        return 0
    current = current_page if current_page is not None else 0
    clamped = max(0, min(current, total_pages))
    # half-up, not Python's banker's rounding
    pct = math.floor(clamped / total_pages * 100 + 0.5)
    return max(0, min(pct, 100))


def should_show_progress(book: Book) -> bool:
    return bool(book.total_pages) and book.current_page is not None
