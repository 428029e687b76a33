"""Book Records - track your reading in the terminal."""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

from textual.app import App

from bookrecords.config import AppConfig, load_config
from bookrecords.library.database import Database
from bookrecords.library.shelf import Library
from bookrecords.ui.screens.library_screen import LibraryScreen
from bookrecords.ui.themes import APP_CSS


class BookRecordsApp(App):
    """Reading tracker with progress, deadlines and library return dates."""

    TITLE = "Book Records"
    CSS = APP_CSS

    def __init__(
        self, config: AppConfig | None = None, import_file: str | None = None
    ) -> None:
        super().__init__()
        self.config = config or load_config()
        self.db = Database(self.config.db_path, self.config.storage_quota_bytes)
        self.library = Library(self.db, max_image_bytes=self.config.max_image_bytes)
        self._import_file = import_file

    def today(self) -> date:
        return date.today()

    def on_mount(self) -> None:
        screen = LibraryScreen()
        self.push_screen(screen)
        if self._import_file:
            file_path = Path(self._import_file).expanduser().resolve()
            if not file_path.exists():
                self.notify(f"File not found: {file_path}", severity="error")
                return
            self.call_after_refresh(screen.start_import, file_path)

    def on_unmount(self) -> None:
        self.db.close()


def _setup_logging(config: AppConfig) -> None:
    handler = logging.FileHandler(config.log_path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root = logging.getLogger("bookrecords")
    root.setLevel(getattr(logging, config.log_level, logging.INFO))
    root.addHandler(handler)


def main() -> None:
    config = load_config()
    _setup_logging(config)

    import_file: str | None = None
    if len(sys.argv) > 1:
        import_file = sys.argv[1]

    app = BookRecordsApp(config=config, import_file=import_file)
    app.run()


if __name__ == "__main__":
    main()
