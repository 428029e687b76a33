"""Data models for the book collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

STATUS_CURRENTLY_READING = "currently-reading"
STATUS_WANT_TO_READ = "want-to-read"
STATUS_COMPLETED = "completed"

BOOK_STATUSES = (STATUS_CURRENTLY_READING, STATUS_WANT_TO_READ, STATUS_COMPLETED)
BOOK_SOURCES = ("library", "personal", "borrowed", "digital", "other")

DEFAULT_STATUS = STATUS_WANT_TO_READ
DEFAULT_SOURCE = "personal"

# attribute name -> JSON key, in export order
_JSON_KEYS = {
    "id": "id",
    "title": "title",
    "author": "author",
    "status": "status",
    "source": "source",
    "total_pages": "totalPages",
    "current_page": "currentPage",
    "image": "image",
    "return_date": "returnDate",
    "deadline": "deadline",
    "notes": "notes",
    "added_date": "addedDate",
    "completed_date": "completedDate",
}


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


@dataclass
class Book:
    id: str
    title: str
    author: str
    status: str = DEFAULT_STATUS
    source: str = DEFAULT_SOURCE
    total_pages: Optional[int] = None
    current_page: Optional[int] = None
    image: Optional[str] = None  # data URL, display only
    return_date: Optional[str] = None  # library books
    deadline: Optional[str] = None  # self-imposed
    notes: Optional[str] = None
    added_date: str = field(default_factory=now_iso)
    completed_date: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def set_status(self, status: str, now: Optional[str] = None) -> None:
        """Change status, keeping ``completed_date`` in step with it.

        The completion time is stamped on the transition into ``completed``,
        kept while the book stays completed and cleared on leaving it.
        """
        if status == STATUS_COMPLETED:
            if not self.is_completed or not self.completed_date:
                self.completed_date = now or now_iso()
        else:
            self.completed_date = None
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        """JSON form with camelCase keys; absent optional fields are omitted."""
        data: dict[str, Any] = {}
        for attr, key in _JSON_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Book:
        kwargs = {
            attr: data[key]
            for attr, key in _JSON_KEYS.items()
            if data.get(key) is not None
        }
        kwargs["id"] = str(kwargs.get("id", ""))
        kwargs.setdefault("title", "")
        kwargs.setdefault("author", "")
        return cls(**kwargs)


@dataclass(frozen=True)
class DailyGoal:
    """Pages per day needed to finish a book by its deadline."""

    pages_per_day: int
    days_remaining: int
    total_pages_remaining: int

    def to_dict(self) -> dict[str, int]:
        return {
            "pagesPerDay": self.pages_per_day,
            "daysRemaining": self.days_remaining,
            "totalPagesRemaining": self.total_pages_remaining,
        }
