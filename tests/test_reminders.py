"""Tests for return-date and deadline notices."""

from __future__ import annotations

import pytest

from bookrecords.errors import InvalidDateError
from bookrecords.reading.reminders import due_notice
from conftest import TODAY, make_book


class TestReturnDate:
    def test_overdue(self):
        notice = due_notice(make_book(return_date="2025-10-08"), TODAY)
        assert notice.kind == "return"
        assert notice.level == "overdue"
        assert notice.is_overdue
        assert notice.describe() == "Overdue return Oct 8, 2025"

    def test_soon(self):
        notice = due_notice(make_book(return_date="2025-10-13"), TODAY)
        assert notice.level == "soon"
        assert notice.describe() == "Library return by Oct 13, 2025 (3 days left)"

    def test_normal(self):
        notice = due_notice(make_book(return_date="2025-10-14"), TODAY)
        assert notice.level == "normal"
        assert notice.days_left == 4

    def test_due_today(self):
        notice = due_notice(make_book(return_date="2025-10-10"), TODAY)
        assert notice.level == "soon"
        assert notice.days_left == 0

    def test_takes_precedence_over_deadline(self):
        book = make_book(return_date="2025-10-20", deadline="2025-10-11")
        assert due_notice(book, TODAY).kind == "return"


class TestDeadline:
    def test_passed(self):
        notice = due_notice(make_book(deadline="2025-10-01"), TODAY)
        assert notice.kind == "deadline"
        assert notice.describe() == "Deadline passed Oct 1, 2025"

    def test_one_day_left(self):
        notice = due_notice(make_book(deadline="2025-10-11"), TODAY)
        assert notice.describe() == "Reading deadline Oct 11, 2025 (1 day left)"

    def test_custom_window(self):
        book = make_book(deadline="2025-10-17")
        assert due_notice(book, TODAY).level == "normal"
        assert due_notice(book, TODAY, deadline_warning_days=7).level == "soon"


def test_no_dates():
    assert due_notice(make_book(), TODAY) is None


def test_invalid_stored_date_raises():
    with pytest.raises(InvalidDateError):
        due_notice(make_book(return_date="next week"), TODAY)
