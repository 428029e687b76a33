"""Library operations over an injected collection store."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from bookrecords.errors import RecordError
from bookrecords.ids import generate_id
from bookrecords.reading.dates import is_valid_date
from bookrecords.reading.stats import LibraryStats, compute_stats

from .images import data_url_size
from .models import (
    BOOK_SOURCES,
    BOOK_STATUSES,
    DEFAULT_SOURCE,
    DEFAULT_STATUS,
    STATUS_CURRENTLY_READING,
    Book,
    now_iso,
)
from .store import CollectionStore
from .transfer import accepted_books, export_records, load_import, write_export

log = logging.getLogger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 500_000

EDITABLE_FIELDS = {
    "title",
    "author",
    "status",
    "source",
    "total_pages",
    "current_page",
    "image",
    "return_date",
    "deadline",
    "notes",
}


class Library:
    """Add, edit, remove, query and transfer books.

    Every call is one read-modify-write against the store; nothing is
    cached between calls.
    """

    def __init__(
        self, store: CollectionStore, max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    ) -> None:
        self._store = store
        self._max_image_bytes = max_image_bytes

    # ── Queries ────────────────────────────────────

    def all_books(self) -> list[Book]:
        return self._store.get_all()

    def get_book(self, book_id: str) -> Optional[Book]:
        for book in self._store.get_all():
            if book.id == book_id:
                return book
        return None

    def list_books(self, status: Optional[str] = None, query: str = "") -> list[Book]:
        """Books filtered by status and search text.

        Currently-reading books come first, then the most recently added.
        """
        books = self._store.get_all()
        if status:
            books = [b for b in books if b.status == status]
        q = query.strip().lower()
        if q:
            books = [
                b
                for b in books
                if q in b.title.lower()
                or q in b.author.lower()
                or q in (b.notes or "").lower()
            ]
        books.sort(key=_added_sort_key, reverse=True)
        books.sort(key=lambda b: b.status != STATUS_CURRENTLY_READING)
        return books

    def stats(self) -> LibraryStats:
        return compute_stats(self._store.get_all())

    # ── Changes ────────────────────────────────────

    def add_book(
        self,
        title: str,
        author: str,
        status: str = DEFAULT_STATUS,
        source: str = DEFAULT_SOURCE,
        now: Optional[str] = None,
        **fields: Any,
    ) -> Book:
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise RecordError(f"Unknown fields: {', '.join(sorted(unknown))}")
        now = now or now_iso()
        book = Book(
            id=generate_id(),
            title=title,
            author=author,
            source=source,
            added_date=now,
            **fields,
        )
        book.current_page = book.current_page if book.current_page is not None else 0
        book.set_status(status, now=now)
        self._check(book)
        self._store.upsert(book)
        log.info("Added book %s (%s)", book.id, book.title)
        return book

    def update_book(self, book_id: str, now: Optional[str] = None, **changes: Any) -> Book:
        """Apply ``changes`` to a stored book; its id and added date never change."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise RecordError(f"Unknown fields: {', '.join(sorted(unknown))}")
        book = self.get_book(book_id)
        if book is None:
            raise RecordError("Book not found", {"id": book_id})

        status = changes.pop("status", book.status)
        for name, value in changes.items():
            setattr(book, name, value)
        book.set_status(status, now=now)
        self._check(book)
        self._store.upsert(book)
        log.info("Updated book %s", book.id)
        return book

    def delete_book(self, book_id: str) -> None:
        self._store.remove(book_id)
        log.info("Removed book %s", book_id)

    # ── Export / Import ────────────────────────────

    def export_json(self) -> str:
        return export_records(self._store.get_all())

    def export_to(self, directory: Path, today: Optional[date] = None) -> Path:
        return write_export(self._store.get_all(), directory, today)

    def prepare_import(self, text: str) -> list[Book]:
        """Validate an import file; returns the books to commit on confirmation.

        Raises:
            ImportFormatError: Unreadable file, non-array JSON or no books.
            ImportRejectedError: Any record failed validation.
        """
        return accepted_books(load_import(text))

    def commit_import(self, books: list[Book]) -> int:
        """Replace the whole collection with ``books``."""
        self._store.replace_all(books)
        log.info("Imported %d books, replacing the collection", len(books))
        return len(books)

    # ── Checks ─────────────────────────────────────

    def _check(self, book: Book) -> None:
        book.title = (book.title or "").strip()
        book.author = (book.author or "").strip()
        for name in ("image", "return_date", "deadline", "notes"):
            if isinstance(getattr(book, name), str) and not getattr(book, name).strip():
                setattr(book, name, None)
        if not book.title:
            raise RecordError("Title is required.")
        if not book.author:
            raise RecordError("Author is required.")
        if book.status not in BOOK_STATUSES:
            raise RecordError("Unknown status", {"status": book.status})
        if book.source not in BOOK_SOURCES:
            raise RecordError("Unknown source", {"source": book.source})
        for name in ("total_pages", "current_page"):
            value = getattr(book, name)
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, int) or value < 0
            ):
                raise RecordError(
                    f"{name} must be a non-negative integer", {name: value}
                )
        if (
            book.total_pages
            and book.current_page
            and book.current_page > book.total_pages
        ):
            raise RecordError("Current page cannot be greater than total pages.")
        for name in ("return_date", "deadline"):
            value = getattr(book, name)
            if value and not is_valid_date(value):
                raise RecordError(f"{name} is not a valid date", {name: value})
        if book.image and data_url_size(book.image) > self._max_image_bytes:
            raise RecordError(
                "Image is too large",
                {"size": data_url_size(book.image), "limit": self._max_image_bytes},
            )


def _added_sort_key(book: Book) -> datetime:
    try:
        added = datetime.fromisoformat(book.added_date)
    except (TypeError, ValueError):
        return datetime.min
    if added.tzinfo is not None:
        added = added.astimezone().replace(tzinfo=None)
    return added
