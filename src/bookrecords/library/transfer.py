"""JSON export and import of the whole collection."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from bookrecords.errors import ImportFormatError, ImportRejectedError

from .models import Book
from .validation import ValidationFailure, ValidationReport, validate_import_batch

log = logging.getLogger(__name__)

SUMMARY_LIMIT = 5


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"book-records-{today.isoformat()}.json"


def export_records(books: Iterable[Book]) -> str:
    return json.dumps([b.to_dict() for b in books], indent=2, ensure_ascii=False)


def write_export(
    books: Iterable[Book], directory: Path, today: Optional[date] = None
) -> Path:
    """Write the collection to ``directory`` and return the file's path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)
    path.write_text(export_records(books), encoding="utf-8")
    log.info("Exported collection to %s", path)
    return path


def load_import(text: str) -> ValidationReport:
    """Parse an import file's text and validate every record in it.

    Raises:
        ImportFormatError: If the text is not JSON or not a JSON array.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportFormatError(
            "Error importing data. Please check the file format.",
            {"line": e.lineno, "column": e.colno},
        ) from e
    if not isinstance(data, list):
        raise ImportFormatError("Invalid file format. Expected an array of books.")
    return validate_import_batch(data)


def summarize_failures(failures: list[ValidationFailure], limit: int = SUMMARY_LIMIT) -> str:
    """User-facing list of the first ``limit`` failures, numbered from 1."""
    lines = [f"  Book {f.index + 1}: {f.reason}" for f in failures[:limit]]
    if len(failures) > limit:
        lines.append(f"  ...and {len(failures) - limit} more")
    return "\n".join(lines)


def accepted_books(report: ValidationReport) -> list[Book]:
    """Valid books of an import, or an error if the batch can't be committed.

    Raises:
        ImportRejectedError: If any record failed validation.
        ImportFormatError: If the batch holds no books at all.
    """
    if report.errors:
        log.error(
            "Import validation errors: %s",
            [{"index": f.index, "reason": f.reason} for f in report.errors],
        )
        summary = (
            f"Found {len(report.errors)} invalid book(s):\n\n"
            f"{summarize_failures(report.errors)}\n\n"
            f"Valid books: {len(report.valid)}/{report.total}\n\n"
            "Please fix the data and try again."
        )
        raise ImportRejectedError(
            summary, report.errors, len(report.valid), report.total
        )
    if not report.valid:
        raise ImportFormatError("No valid books found in the import file.")
    return report.valid
