"""Tests for book form input parsing."""

from pathlib import Path

import pytest

from bookrecords.errors import RecordError
from bookrecords.ui.screens.book_form_screen import image_changes, parse_page_count


class TestParsePageCount:
    def test_blank(self):
        assert parse_page_count("  ", "Total pages") is None

    def test_number(self):
        assert parse_page_count(" 320 ", "Total pages") == 320

    def test_zero(self):
        assert parse_page_count("0", "Current page") == 0

    @pytest.mark.parametrize("raw", ["abc", "1.5", "-4"])
    def test_rejected(self, raw):
        with pytest.raises(RecordError):
            parse_page_count(raw, "Current page")


class TestImageChanges:
    def test_blank_keeps_current(self):
        assert image_changes("   ", 1000) == {}

    def test_dash_removes(self):
        assert image_changes(" - ", 1000) == {"image": None}

    def test_path_replaces(self, tmp_path: Path):
        f = tmp_path / "cover.png"
        f.write_bytes(b"\x89PNG\r\n\x1a\n")
        changes = image_changes(str(f), 1000)
        assert changes["image"].startswith("data:image/png;base64,")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(RecordError):
            image_changes(str(tmp_path / "nope.png"), 1000)
