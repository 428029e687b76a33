from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from bookrecords.errors import (
    BookRecordsError,
    ImportFormatError,
    ImportRejectedError,
    InvalidDateError,
    StorageQuotaExceeded,
)
from bookrecords.library.models import Book
from bookrecords.reading.dates import format_date
from bookrecords.reading.pace import calculate_daily_goal
from bookrecords.reading.progress import calculate_progress, should_show_progress
from bookrecords.reading.reminders import DueNotice, due_notice
from bookrecords.ui.screens.book_form_screen import BookFormScreen

if TYPE_CHECKING:
    from bookrecords.app import BookRecordsApp

log = logging.getLogger(__name__)

FILTER_OPTIONS = [
    (None, "All Books"),
    ("currently-reading", "Currently Reading"),
    ("want-to-read", "Want to Read"),
    ("completed", "Completed"),
]


class JsonDirectoryTree(DirectoryTree):
    def filter_paths(self, paths: Iterable[Path]) -> Iterable[Path]:
        return sorted(
            [p for p in paths if p.is_dir() or p.suffix.lower() == ".json"],
            key=lambda p: (not p.is_dir(), p.name.lower()),
        )


class FilePickerScreen(ModalScreen[Optional[str]]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    FilePickerScreen {
        align: center middle;
    }
    #file-picker-dialog {
        width: 80%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    #file-picker-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #file-tree {
        height: 1fr;
        margin-bottom: 1;
    }
    #file-picker-buttons {
        align: center middle;
        height: 3;
    }
    """

    def __init__(self, start_path: str = "~") -> None:
        super().__init__()
        self._start = str(Path(start_path).expanduser().resolve())

    def compose(self) -> ComposeResult:
        with Vertical(id="file-picker-dialog"):
            yield Label("Select a book records export (.json)", id="file-picker-title")
            yield JsonDirectoryTree(self._start, id="file-tree")
            with Horizontal(id="file-picker-buttons"):
                yield Button("Cancel [Esc]", variant="default", id="fp-cancel")

    def on_mount(self) -> None:
        self.query_one("#file-tree", JsonDirectoryTree).focus()

    @on(DirectoryTree.FileSelected)
    def on_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.dismiss(str(event.path))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "fp-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
    ]

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }
    #confirm-dialog {
        width: 64;
        height: auto;
        background: $surface;
        border: solid $error;
        padding: 1 2;
    }
    #confirm-msg {
        width: 100%;
        text-align: center;
        margin: 1 0;
    }
    #confirm-buttons {
        align: center middle;
        height: 3;
    }
    #confirm-buttons Button {
        margin: 0 2;
    }
    """

    def __init__(self, message: str, confirm_label: str = "Yes") -> None:
        super().__init__()
        self._message = message
        self._confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(self._message, id="confirm-msg")
            with Horizontal(id="confirm-buttons"):
                yield Button(f"{self._confirm_label} (y)", variant="error", id="cf-yes")
                yield Button("Cancel (n)", variant="default", id="cf-no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "cf-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class LibraryScreen(Screen):
    BINDINGS = [
        Binding("A", "add_book", "Add", priority=True),
        Binding("E", "edit_book", "Edit", priority=True),
        Binding("D", "delete_book", "Delete", priority=True),
        Binding("f", "cycle_filter", "Filter"),
        Binding("S", "toggle_search", "Search"),
        Binding("x", "export_data", "Export"),
        Binding("i", "import_data", "Import"),
        Binding("q", "quit_app", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._filter_index = 0
        self._searching = False

    @property
    def br(self) -> BookRecordsApp:
        return self.app  # type: ignore[return-value]

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="library-header")
        with Horizontal(id="search-bar"):
            yield Input(
                placeholder="Search by title, author, or notes... (Esc to close)",
                id="search-input",
            )
        yield DataTable(id="book-table")
        yield Static("", id="book-detail")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#book-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("Title", "Author", "Status", "Source", "Progress", "Goal", "Due")
        self.refresh_books()
        table.focus()

    def on_screen_resume(self) -> None:
        self.refresh_books()
        if not self._searching:
            self.query_one("#book-table", DataTable).focus()

    def refresh_books(self) -> None:
        table = self.query_one("#book-table", DataTable)
        table.clear()

        status, filter_label = FILTER_OPTIONS[self._filter_index]
        query = self.query_one("#search-input", Input).value
        try:
            books = self.br.library.list_books(status=status, query=query)
            stats = self.br.library.stats()
        except BookRecordsError as e:
            log.exception("Could not load books")
            self.notify(str(e), severity="error")
            return

        for book in books:
            table.add_row(
                book.title,
                book.author,
                book.status.replace("-", " "),
                book.source,
                self._progress_cell(book),
                self._goal_cell(book),
                self._due_cell(book),
                key=book.id,
            )

        self.query_one("#library-header", Static).update(
            f" Book Records  {stats.total} books · {stats.currently_reading} reading"
            f" · {stats.want_to_read} want to read · {stats.completed} completed"
            f" · {stats.completion_rate}% completion · {stats.pages_read:,} pages read"
            f"   Filter: {filter_label}"
        )
        if not books:
            empty = (
                "No books found matching your criteria"
                if query or status
                else "No books yet. Press A to add your first book!"
            )
            self._show_detail(empty)

    # ── Cells ───────────────────────────────────

    @staticmethod
    def _progress_cell(book: Book) -> str:
        if not should_show_progress(book):
            return ""
        pct = calculate_progress(book.total_pages, book.current_page)
        return f"{pct}% ({book.current_page}/{book.total_pages})"

    def _goal_cell(self, book: Book) -> str:
        goal = calculate_daily_goal(book, self.br.today())
        if not goal or goal.days_remaining <= 0:
            return ""
        unit = "day" if goal.days_remaining == 1 else "days"
        return f"{goal.pages_per_day} p/day, {goal.days_remaining} {unit}"

    def _notice(self, book: Book) -> Optional[DueNotice]:
        config = self.br.config
        return due_notice(
            book,
            self.br.today(),
            return_warning_days=config.return_warning_days,
            deadline_warning_days=config.deadline_warning_days,
        )

    def _due_cell(self, book: Book) -> str:
        try:
            notice = self._notice(book)
        except InvalidDateError as e:
            log.warning("Book %s: %s", book.id, e)
            return "invalid date"
        if not notice:
            return ""
        marker = {"overdue": "!! ", "soon": "! "}.get(notice.level, "")
        return f"{marker}{notice.date_text}"

    # ── Detail line ─────────────────────────────

    def _show_detail(self, text: str, level: str = "") -> None:
        detail = self.query_one("#book-detail", Static)
        detail.set_class(level == "overdue", "overdue")
        detail.set_class(level == "soon", "soon")
        detail.update(text)

    @on(DataTable.RowHighlighted, "#book-table")
    def on_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.row_key is None or event.row_key.value is None:
            return
        book = self.br.library.get_book(str(event.row_key.value))
        if not book:
            return
        lines = [f"Added {self._safe_format(book.added_date)}"]
        if book.completed_date:
            lines[0] += f" · Completed {self._safe_format(book.completed_date)}"
        level = ""
        try:
            notice = self._notice(book)
        except InvalidDateError as e:
            notice = None
            lines.append(str(e))
        if notice:
            lines.append(notice.describe())
            level = notice.level
        if book.notes:
            lines.append(book.notes)
        self._show_detail("\n".join(lines), level)

    @staticmethod
    def _safe_format(value: str) -> str:
        try:
            return format_date(value)
        except InvalidDateError:
            return value

    # ── Search / Filter ─────────────────────────

    def action_toggle_search(self) -> None:
        if self._searching:
            self._hide_search()
        else:
            self._searching = True
            self.query_one("#search-bar").styles.display = "block"
            inp = self.query_one("#search-input", Input)
            inp.value = ""
            inp.focus()

    def _hide_search(self) -> None:
        self._searching = False
        self.query_one("#search-bar").styles.display = "none"
        self.query_one("#search-input", Input).value = ""
        self.refresh_books()
        self.query_one("#book-table", DataTable).focus()

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.refresh_books()

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        self.query_one("#book-table", DataTable).focus()

    def on_key(self, event) -> None:
        if self._searching and event.key == "escape":
            self._hide_search()
            event.stop()
            event.prevent_default()

    def action_cycle_filter(self) -> None:
        self._filter_index = (self._filter_index + 1) % len(FILTER_OPTIONS)
        self.refresh_books()

    # ── Add / Edit ──────────────────────────────

    def _selected_book(self) -> Optional[Book]:
        table = self.query_one("#book-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self.br.library.get_book(str(row_key.value))

    def action_add_book(self) -> None:
        self.app.push_screen(
            BookFormScreen(max_image_bytes=self.br.config.max_image_bytes),
            callback=self._on_book_added,
        )

    def _on_book_added(self, fields: Optional[dict]) -> None:
        if not fields:
            return
        self._save(lambda: self.br.library.add_book(**fields), "Added")

    def action_edit_book(self) -> None:
        book = self._selected_book()
        if not book:
            return
        self.app.push_screen(
            BookFormScreen(book, max_image_bytes=self.br.config.max_image_bytes),
            callback=lambda fields: self._on_book_edited(fields, book.id),
        )

    def _on_book_edited(self, fields: Optional[dict], book_id: str) -> None:
        if not fields:
            return
        self._save(lambda: self.br.library.update_book(book_id, **fields), "Saved")

    def _save(self, operation, verb: str) -> None:
        try:
            book = operation()
        except StorageQuotaExceeded as e:
            log.warning("Save refused: %s", e)
            self.notify(
                f"{e.message} Your last change may not have been saved.",
                severity="error",
                timeout=10,
            )
            return
        except BookRecordsError as e:
            self.notify(str(e), severity="error")
            return
        self.refresh_books()
        self.notify(f"{verb}: {book.title}")

    # ── Delete ──────────────────────────────────

    def action_delete_book(self) -> None:
        book = self._selected_book()
        if not book:
            return
        self.app.push_screen(
            ConfirmScreen(f'Delete "{book.title}" from your books?', "Delete"),
            callback=lambda confirmed: self._on_delete_confirmed(confirmed, book),
        )

    def _on_delete_confirmed(self, confirmed: Optional[bool], book: Book) -> None:
        if not confirmed:
            return
        try:
            self.br.library.delete_book(book.id)
        except BookRecordsError as e:
            self.notify(str(e), severity="error")
            return
        self.refresh_books()
        self.notify(f"Removed: {book.title}")

    # ── Export / Import ─────────────────────────

    def action_export_data(self) -> None:
        try:
            path = self.br.library.export_to(self.br.config.export_dir, self.br.today())
        except (OSError, BookRecordsError) as e:
            log.exception("Export failed")
            self.notify(f"Export failed: {e}", severity="error")
            return
        self.notify(f"Exported to {path}")

    def action_import_data(self) -> None:
        self.app.push_screen(
            FilePickerScreen(str(self.br.config.export_dir)),
            callback=self._on_import_picked,
        )

    def _on_import_picked(self, result: Optional[str]) -> None:
        if result:
            self.start_import(Path(result))

    def start_import(self, file_path: Path) -> None:
        try:
            text = file_path.read_text(encoding="utf-8")
            books = self.br.library.prepare_import(text)
        except (OSError, UnicodeDecodeError) as e:
            self.notify(f"Could not read {file_path}: {e}", severity="error")
            return
        except ImportRejectedError as e:
            self.notify(e.message, title="Import rejected", severity="error", timeout=15)
            return
        except ImportFormatError as e:
            self.notify(e.message, severity="error")
            return
        self.app.push_screen(
            ConfirmScreen(
                f"Import {len(books)} books? This will replace existing data.",
                "Import",
            ),
            callback=lambda confirmed: self._on_import_confirmed(confirmed, books),
        )

    def _on_import_confirmed(self, confirmed: Optional[bool], books: list[Book]) -> None:
        if not confirmed:
            return
        try:
            count = self.br.library.commit_import(books)
        except StorageQuotaExceeded as e:
            log.warning("Import refused: %s", e)
            self.notify(f"{e.message} Nothing was imported.", severity="error")
            return
        except BookRecordsError as e:
            self.notify(str(e), severity="error")
            return
        self.refresh_books()
        self.notify(f"Imported {count} books")

    def action_quit_app(self) -> None:
        self.app.exit()
