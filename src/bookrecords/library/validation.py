"""Validation of externally supplied (imported) book records."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from bookrecords.reading.dates import is_valid_date

from .models import (
    BOOK_SOURCES,
    BOOK_STATUSES,
    DEFAULT_SOURCE,
    STATUS_COMPLETED,
    Book,
)

_PAGE_FIELDS = ("totalPages", "currentPage")
_OPTIONAL_DATE_FIELDS = ("returnDate", "deadline", "completedDate")
_OPTIONAL_TEXT_FIELDS = ("notes", "image")


@dataclass
class ValidationFailure:
    index: int  # position in the submitted batch, 0-based
    reasons: list[str] = field(default_factory=list)

    @property
    def reason(self) -> str:
        return ", ".join(self.reasons)


@dataclass
class ValidationReport:
    valid: list[Book] = field(default_factory=list)
    errors: list[ValidationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def total(self) -> int:
        return len(self.valid) + len(self.errors)


def validate_import_batch(raw_records: Iterable[Any]) -> ValidationReport:
    """Check every candidate record and split the batch into valid and failed.

    Never raises and never stops early: each failing element is reported
    with all of its reasons so the caller can show a complete error list.
    Inputs are not modified; accepted records carry the normalized id.
    """
    report = ValidationReport()
    for index, raw in enumerate(raw_records):
        record, reasons = validate_record(raw)
        if reasons:
            report.errors.append(ValidationFailure(index=index, reasons=reasons))
        else:
            report.valid.append(Book.from_dict(record))
    return report


def validate_record(raw: Any) -> tuple[dict[str, Any], list[str]]:
    """Return the normalized record and the reasons it is invalid, if any."""
    if not isinstance(raw, dict):
        return {}, ["not an object"]

    record = dict(raw)
    reasons: list[str] = []

    record_id, id_error = _normalize_id(raw.get("id"))
    if id_error:
        reasons.append(id_error)
    else:
        record["id"] = record_id

    for key in ("title", "author"):
        if _non_empty_str(raw.get(key)):
            record[key] = raw[key].strip()
        else:
            reasons.append(f"{key} missing or empty")
    if raw.get("status") not in BOOK_STATUSES:
        reasons.append("status invalid or missing")

    added = raw.get("addedDate")
    if not isinstance(added, str):
        reasons.append("addedDate missing or not a string")
    elif not is_valid_date(added):
        reasons.append("addedDate is not a valid date")

    source = raw.get("source")
    if source is None:
        record["source"] = DEFAULT_SOURCE
    elif source not in BOOK_SOURCES:
        reasons.append("source invalid")

    for key in _OPTIONAL_TEXT_FIELDS:
        value = raw.get(key)
        if value is not None and not isinstance(value, str):
            reasons.append(f"{key} must be a string")

    for key in _PAGE_FIELDS:
        value = raw.get(key)
        if value is None:
            continue
        pages = _non_negative_int(value)
        if pages is None:
            reasons.append(f"{key} must be a non-negative integer")
        else:
            record[key] = pages

    for key in _OPTIONAL_DATE_FIELDS:
        value = raw.get(key)
        if value is not None and not is_valid_date(value):
            reasons.append(f"{key} is not a valid date")

    # completedDate is present exactly when the book is completed
    if raw.get("status") != STATUS_COMPLETED:
        record.pop("completedDate", None)
    elif raw.get("completedDate") is None and isinstance(added, str):
        record["completedDate"] = added

    return record, reasons


def _normalize_id(value: Any) -> tuple[str, Optional[str]]:
    if isinstance(value, bool):
        return "", "id missing or invalid type"
    if isinstance(value, int):
        return str(value), None
    if isinstance(value, float):
        if not math.isfinite(value):
            return "", "id missing or invalid type"
        return (str(int(value)) if value.is_integer() else repr(value)), None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return "", "id is empty string"
        return stripped, None
    return "", "id missing or invalid type"


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _non_negative_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None
