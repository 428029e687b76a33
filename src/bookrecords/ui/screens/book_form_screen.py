"""Modal form for adding and editing a book."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select

from bookrecords.errors import RecordError
from bookrecords.library.images import image_to_data_url
from bookrecords.library.models import (
    BOOK_SOURCES,
    BOOK_STATUSES,
    DEFAULT_SOURCE,
    DEFAULT_STATUS,
    Book,
)

STATUS_LABELS = {
    "currently-reading": "Currently Reading",
    "want-to-read": "Want to Read",
    "completed": "Completed",
}

_TEXT_FIELDS = ("title", "author", "return_date", "deadline", "notes")
_PAGE_FIELDS = ("total_pages", "current_page")

CLEAR_IMAGE = "-"


def parse_page_count(raw: str, label: str) -> Optional[int]:
    """Blank means not set; anything else must be a non-negative integer."""
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise RecordError(f"{label} must be a whole number") from None
    if value < 0:
        raise RecordError(f"{label} cannot be negative")
    return value


def image_changes(raw: str, max_image_bytes: int) -> dict[str, Optional[str]]:
    """Blank keeps the current cover, ``-`` removes it, a path replaces it."""
    raw = raw.strip()
    if not raw:
        return {}
    if raw == CLEAR_IMAGE:
        return {"image": None}
    return {"image": image_to_data_url(Path(raw).expanduser(), max_image_bytes)}


class BookFormScreen(ModalScreen[Optional[dict]]):
    """Collects the editable fields of a book.

    Dismisses with a dict of field values ready for ``Library.add_book`` or
    ``Library.update_book``, or None when cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(self, book: Optional[Book] = None, max_image_bytes: int = 500_000) -> None:
        super().__init__()
        self._book = book
        self._max_image_bytes = max_image_bytes

    def _initial(self, name: str) -> str:
        if self._book is None:
            return "0" if name == "current_page" else ""
        value = getattr(self._book, name)
        return "" if value is None else str(value)

    def compose(self) -> ComposeResult:
        heading = "Edit Book" if self._book else "Add New Book"
        status = self._book.status if self._book else DEFAULT_STATUS
        source = self._book.source if self._book else DEFAULT_SOURCE
        with Vertical(id="book-form-dialog"):
            yield Label(heading, id="book-form-title")
            with VerticalScroll(id="book-form-fields"):
                yield Label("Title *")
                yield Input(self._initial("title"), id="title")
                yield Label("Author *")
                yield Input(self._initial("author"), id="author")
                yield Label("Status")
                yield Select(
                    [(STATUS_LABELS[s], s) for s in BOOK_STATUSES],
                    value=status,
                    allow_blank=False,
                    id="status",
                )
                yield Label("Source")
                yield Select(
                    [(s.capitalize(), s) for s in BOOK_SOURCES],
                    value=source,
                    allow_blank=False,
                    id="source",
                )
                yield Label("Total pages")
                yield Input(self._initial("total_pages"), type="integer", id="total_pages")
                yield Label("Current page")
                yield Input(self._initial("current_page"), type="integer", id="current_page")
                yield Label("Library return date (YYYY-MM-DD)")
                yield Input(self._initial("return_date"), id="return_date")
                yield Label("Reading deadline (YYYY-MM-DD)")
                yield Input(self._initial("deadline"), id="deadline")
                yield Label("Notes")
                yield Input(self._initial("notes"), id="notes")
                yield Label("Cover image file (blank keeps it, - removes it)")
                yield Input("", id="image")
            with Horizontal(id="book-form-buttons"):
                yield Button("Save (ctrl+s)", variant="primary", id="bf-save")
                yield Button("Cancel [Esc]", variant="default", id="bf-cancel")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def collect(self) -> dict[str, Any]:
        """Read the form into field values, raising RecordError on bad input."""
        fields: dict[str, Any] = {
            name: self.query_one(f"#{name}", Input).value.strip() or None
            for name in _TEXT_FIELDS
        }
        fields["title"] = fields["title"] or ""
        fields["author"] = fields["author"] or ""
        fields["status"] = self.query_one("#status", Select).value
        fields["source"] = self.query_one("#source", Select).value
        for name in _PAGE_FIELDS:
            label = name.replace("_", " ").capitalize()
            fields[name] = parse_page_count(self.query_one(f"#{name}", Input).value, label)
        if fields["current_page"] is None:
            fields["current_page"] = 0

        fields.update(
            image_changes(self.query_one("#image", Input).value, self._max_image_bytes)
        )
        return fields

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "bf-save":
            self.action_save()
        else:
            self.dismiss(None)

    def action_save(self) -> None:
        try:
            fields = self.collect()
        except RecordError as e:
            self.notify(str(e), severity="error")
            return
        self.dismiss(fields)

    def action_cancel(self) -> None:
        self.dismiss(None)
