"""Tests for id generation."""

from __future__ import annotations

import re
import uuid
from unittest.mock import patch

from bookrecords.ids import generate_id

UUID4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


class TestGenerateId:
    def test_format(self):
        book_id = generate_id()
        assert len(book_id) == 36
        assert UUID4_RE.match(book_id)

    def test_thousand_ids_are_distinct(self):
        ids = [generate_id() for _ in range(1000)]
        assert len(set(ids)) == 1000
        assert all(UUID4_RE.match(i) for i in ids)

    def test_fallback_without_os_randomness(self):
        with patch.object(uuid, "uuid4", side_effect=NotImplementedError):
            ids = {generate_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(UUID4_RE.match(i) for i in ids)
