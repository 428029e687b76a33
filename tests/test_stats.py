"""Tests for collection statistics."""

from bookrecords.reading.stats import LibraryStats, compute_stats
from conftest import make_book


class TestComputeStats:
    def test_empty(self):
        assert compute_stats([]) == LibraryStats()

    def test_counts(self):
        books = [
            make_book(id="1", status="currently-reading", total_pages=300, current_page=100),
            make_book(id="2", status="want-to-read", total_pages=None, current_page=None),
            make_book(id="3", status="completed", total_pages=200, current_page=200),
        ]
        stats = compute_stats(books)
        assert stats.total == 3
        assert stats.currently_reading == 1
        assert stats.want_to_read == 1
        assert stats.completed == 1
        assert stats.total_pages == 500
        assert stats.pages_read == 300
        assert stats.completion_rate == 33

    def test_completion_rate_rounds_half_up(self):
        books = [make_book(id="1", status="completed")] + [
            make_book(id=str(i), status="want-to-read") for i in range(2, 9)
        ]
        # 1 of 8 = 12.5%
        assert compute_stats(books).completion_rate == 13
