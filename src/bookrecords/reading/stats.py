"""Aggregate statistics over the whole collection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from bookrecords.library.models import (
    STATUS_COMPLETED,
    STATUS_CURRENTLY_READING,
    STATUS_WANT_TO_READ,
    Book,
)


@dataclass(frozen=True)
class LibraryStats:
    total: int = 0
    currently_reading: int = 0
    want_to_read: int = 0
    completed: int = 0
    total_pages: int = 0
    pages_read: int = 0
    completion_rate: int = 0  # percent of books completed


def compute_stats(books: Iterable[Book]) -> LibraryStats:
    books = list(books)
    total = len(books)
    completed = sum(1 for b in books if b.status == STATUS_COMPLETED)
    rate = math.floor(completed / total * 100 + 0.5) if total else 0
    return LibraryStats(
        total=total,
        currently_reading=sum(1 for b in books if b.status == STATUS_CURRENTLY_READING),
        want_to_read=sum(1 for b in books if b.status == STATUS_WANT_TO_READ),
        completed=completed,
        total_pages=sum(b.total_pages or 0 for b in books),
        pages_read=sum(b.current_page or 0 for b in books),
        completion_rate=rate,
    )
