"""Tests for the exception hierarchy."""

from bookrecords.errors import (
    BookRecordsError,
    ImportFormatError,
    ImportRejectedError,
    InvalidDateError,
    RecordError,
    StorageError,
    StorageQuotaExceeded,
)


class TestHierarchy:
    def test_all_inherit_from_base(self):
        for cls in (
            InvalidDateError,
            RecordError,
            StorageError,
            StorageQuotaExceeded,
            ImportFormatError,
            ImportRejectedError,
        ):
            assert issubclass(cls, BookRecordsError)

    def test_quota_is_storage_error(self):
        assert issubclass(StorageQuotaExceeded, StorageError)


class TestMessages:
    def test_details_rendered(self):
        err = BookRecordsError("Failed", {"id": "7"})
        assert str(err) == "Failed (id=7)"

    def test_plain_message(self):
        assert str(RecordError("Title is required.")) == "Title is required."

    def test_invalid_date(self):
        err = InvalidDateError("format_date", "bogus")
        assert err.operation == "format_date"
        assert err.value == "bogus"
        assert str(err) == 'Invalid date string passed to format_date: "bogus"'

    def test_quota(self):
        err = StorageQuotaExceeded(size=900, quota=500)
        assert err.size == 900
        assert "size=900" in str(err)
        assert "quota=500" in str(err)
