"""Exception hierarchy for book records."""

from __future__ import annotations

from typing import Any, Optional


class BookRecordsError(Exception):
    """Base exception for all book records errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidDateError(BookRecordsError):
    """A date string could not be parsed to a calendar date."""

    def __init__(self, operation: str, value: object) -> None:
        super().__init__(
            f'Invalid date string passed to {operation}: "{value}"',
        )
        self.operation = operation
        self.value = value


class RecordError(BookRecordsError):
    """An add or edit of a single record was rejected."""


# ── Storage ────────────────────────────────────────


class StorageError(BookRecordsError):
    """The collection store could not be read or written."""


class StorageQuotaExceeded(StorageError):
    """The backing medium rejected a write for lack of space."""

    def __init__(self, size: int, quota: int, message: str = "") -> None:
        super().__init__(
            message or "Storage limit exceeded. Remove some books or images.",
            {"size": size, "quota": quota},
        )
        self.size = size
        self.quota = quota


# ── Import ─────────────────────────────────────────


class ImportFormatError(BookRecordsError):
    """The import file is not a JSON array of records."""


class ImportRejectedError(BookRecordsError):
    """An import batch contained invalid records and was refused in full."""

    def __init__(self, summary: str, failures: list, valid_count: int, total: int) -> None:
        super().__init__(summary)
        self.failures = failures
        self.valid_count = valid_count
        self.total = total
