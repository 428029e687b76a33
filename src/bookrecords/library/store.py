"""The persistence boundary the library is written against."""

from __future__ import annotations

from typing import Iterable, Protocol

from .models import Book


class CollectionStore(Protocol):
    """Holds the full collection of books.

    ``replace_all`` and ``upsert`` raise ``StorageQuotaExceeded`` when the
    backing medium refuses the write; callers must surface it.
    """

    def get_all(self) -> list[Book]: ...

    def replace_all(self, books: Iterable[Book]) -> None: ...

    def upsert(self, book: Book) -> None: ...

    def remove(self, book_id: str) -> None: ...
