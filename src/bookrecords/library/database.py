"""SQLite-backed collection store.

The whole collection lives as one JSON array under a single key, mirroring
a browser key-value store, with a byte quota on what may be written.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Iterable

from bookrecords.errors import StorageError, StorageQuotaExceeded

from .models import Book

log = logging.getLogger(__name__)

STORAGE_KEY = "book-records"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at REAL NOT NULL
);
"""


class Database:
    def __init__(self, db_path: Path, quota_bytes: int = DEFAULT_QUOTA_BYTES) -> None:
        self._db_path = db_path
        self._quota = quota_bytes
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._init_schema()

    def _init_schema(self) -> None:
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    # ── Collection ─────────────────────────────────────

    def get_all(self) -> list[Book]:
        row = self._conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (STORAGE_KEY,)
        ).fetchone()
        if not row:
            return []
        try:
            data = json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(
                "Stored collection is not valid JSON", {"key": STORAGE_KEY}
            ) from e
        if not isinstance(data, list):
            raise StorageError("Stored collection is not a list", {"key": STORAGE_KEY})
        bad = [i for i, item in enumerate(data) if not isinstance(item, dict)]
        if bad:
            raise StorageError(
                "Stored collection has entries that are not books",
                {"key": STORAGE_KEY, "positions": bad},
            )
        return [Book.from_dict(item) for item in data]

    def replace_all(self, books: Iterable[Book]) -> None:
        payload = json.dumps([b.to_dict() for b in books], ensure_ascii=False)
        size = len(payload.encode("utf-8"))
        if size > self._quota:
            log.warning("Write of %d bytes exceeds quota of %d", size, self._quota)
            raise StorageQuotaExceeded(size, self._quota)
        try:
            self._conn.execute(
                """INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, ?)""",
                (STORAGE_KEY, payload, time.time()),
            )
            self._conn.commit()
        except sqlite3.OperationalError as e:
            self._conn.rollback()
            if "full" in str(e).lower():
                log.warning("Disk full while writing collection: %s", e)
                raise StorageQuotaExceeded(size, self._quota, str(e)) from e
            raise StorageError(f"Could not write collection: {e}") from e

    def upsert(self, book: Book) -> None:
        books = self.get_all()
        for i, existing in enumerate(books):
            if existing.id == book.id:
                books[i] = book
                break
        else:
            books.append(book)
        self.replace_all(books)

    def remove(self, book_id: str) -> None:
        books = self.get_all()
        remaining = [b for b in books if b.id != book_id]
        if len(remaining) != len(books):
            self.replace_all(remaining)
