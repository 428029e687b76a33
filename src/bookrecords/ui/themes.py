"""Textual CSS themes for book records."""

APP_CSS = """
/* ── Global ────────────────────────────────── */
Screen {
    background: $surface;
}

/* ── Library Screen ────────────────────────── */
#library-header {
    dock: top;
    height: 3;
    padding: 1 2;
    background: $primary;
    color: $text;
    text-style: bold;
}

#search-bar {
    dock: top;
    height: 3;
    padding: 0 2;
    background: $surface-darken-1;
    display: none;
}

#search-input {
    width: 100%;
}

#book-table {
    height: 1fr;
}

#book-detail {
    dock: bottom;
    height: auto;
    max-height: 6;
    padding: 0 2;
    background: $surface-darken-1;
    color: $text-muted;
}

#book-detail.overdue {
    color: $error;
}

#book-detail.soon {
    color: $warning;
}

/* ── Book Form ─────────────────────────────── */
BookFormScreen {
    align: center middle;
}

#book-form-dialog {
    width: 72;
    height: 90%;
    background: $surface;
    border: solid $primary;
    padding: 1 2;
}

#book-form-title {
    text-align: center;
    text-style: bold;
    margin-bottom: 1;
}

#book-form-fields {
    height: 1fr;
}

#book-form-fields Label {
    margin-top: 1;
    color: $text-muted;
}

#book-form-buttons {
    align: center middle;
    height: 3;
}

#book-form-buttons Button {
    margin: 0 2;
}
"""
