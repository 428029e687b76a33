"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from bookrecords.config import AppConfig
from bookrecords.library.database import Database
from bookrecords.library.models import Book
from bookrecords.library.shelf import Library

TODAY = date(2025, 10, 10)

ENV_VARS = (
    "BOOKRECORDS_EXPORT_DIR",
    "BOOKRECORDS_STORAGE_QUOTA",
    "BOOKRECORDS_MAX_IMAGE_BYTES",
    "BOOKRECORDS_RETURN_WARNING_DAYS",
    "BOOKRECORDS_DEADLINE_WARNING_DAYS",
    "BOOKRECORDS_LOG_LEVEL",
)


def make_book(**overrides) -> Book:
    fields = dict(
        id="1",
        title="Test",
        author="Author",
        status="currently-reading",
        source="personal",
        total_pages=300,
        current_page=100,
        added_date="2025-10-01",
    )
    fields.update(overrides)
    return Book(**fields)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db(tmp_path: Path) -> Database:
    db_path = tmp_path / "test.db"
    database = Database(db_path)
    yield database
    database.close()


@pytest.fixture
def library(db: Database) -> Library:
    return Library(db)


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        data_dir=tmp_path / "data",
        config_dir=tmp_path / "config",
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so teardown also removes what load_dotenv adds
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
