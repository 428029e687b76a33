"""Tests for data models."""

from bookrecords.library.models import Book, DailyGoal


class TestBook:
    def test_defaults(self):
        book = Book(id="abc", title="Test", author="A")
        assert book.status == "want-to-read"
        assert book.source == "personal"
        assert book.total_pages is None
        assert book.current_page is None
        assert book.completed_date is None
        assert book.added_date

    def test_to_dict_camel_case_and_omits_absent(self):
        book = Book(
            id="abc",
            title="Test",
            author="A",
            total_pages=120,
            current_page=0,
            added_date="2025-10-01",
        )
        assert book.to_dict() == {
            "id": "abc",
            "title": "Test",
            "author": "A",
            "status": "want-to-read",
            "source": "personal",
            "totalPages": 120,
            "currentPage": 0,
            "addedDate": "2025-10-01",
        }

    def test_from_dict_round_trip(self):
        book = Book(
            id="abc",
            title="Test",
            author="A",
            status="completed",
            source="library",
            return_date="2025-11-01",
            notes="n",
            added_date="2025-10-01",
            completed_date="2025-10-09T10:00:00",
        )
        assert Book.from_dict(book.to_dict()) == book

    def test_from_dict_ignores_unknown_keys(self):
        book = Book.from_dict({"id": 5, "title": "T", "author": "A", "rating": 4})
        assert book.id == "5"
        assert not hasattr(book, "rating")


class TestStatusTransitions:
    def test_completing_stamps_date(self):
        book = Book(id="1", title="T", author="A")
        book.set_status("completed", now="2025-10-10T12:00:00")
        assert book.is_completed
        assert book.completed_date == "2025-10-10T12:00:00"

    def test_staying_completed_keeps_date(self):
        book = Book(id="1", title="T", author="A")
        book.set_status("completed", now="2025-10-10T12:00:00")
        book.set_status("completed", now="2025-12-01T08:00:00")
        assert book.completed_date == "2025-10-10T12:00:00"

    def test_leaving_completed_clears_date(self):
        book = Book(id="1", title="T", author="A")
        book.set_status("completed", now="2025-10-10T12:00:00")
        book.set_status("currently-reading")
        assert book.completed_date is None
        assert book.status == "currently-reading"

    def test_completed_without_date_gets_one(self):
        book = Book(id="1", title="T", author="A", status="completed")
        book.set_status("completed", now="2025-10-10T12:00:00")
        assert book.completed_date == "2025-10-10T12:00:00"


class TestDailyGoal:
    def test_frozen_equality(self):
        assert DailyGoal(1, 2, 3) == DailyGoal(
            pages_per_day=1, days_remaining=2, total_pages_remaining=3
        )
