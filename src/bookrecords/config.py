"""Configuration management via .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

log = logging.getLogger(__name__)


def _xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


@dataclass
class AppConfig:
    # Paths
    data_dir: Path = field(default_factory=lambda: _xdg_data_home() / "bookrecords")
    config_dir: Path = field(default_factory=lambda: _xdg_config_home() / "bookrecords")
    export_dir: Path = field(default_factory=Path.home)
    db_path: Path = field(init=False)
    log_path: Path = field(init=False)

    # Storage limits
    storage_quota_bytes: int = 5 * 1024 * 1024
    max_image_bytes: int = 500_000

    # Days ahead at which a due date is flagged as coming up
    return_warning_days: int = 3
    deadline_warning_days: int = 5

    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.db_path = self.data_dir / "bookrecords.db"
        self.log_path = self.data_dir / "bookrecords.log"
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.config_dir.mkdir(parents=True, exist_ok=True)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r, not an integer", name, raw)
        return default


def load_config(env_path: Optional[Path] = None, **overrides) -> AppConfig:
    """Load config from .env file. Searches CWD then config dir."""
    search_paths = [
        env_path,
        Path.cwd() / ".env",
        _xdg_config_home() / "bookrecords" / ".env",
        Path.home() / ".env",
    ]
    for p in search_paths:
        if p and p.exists():
            load_dotenv(p)
            break

    values: dict = {
        "storage_quota_bytes": _env_int(
            "BOOKRECORDS_STORAGE_QUOTA", AppConfig.storage_quota_bytes
        ),
        "max_image_bytes": _env_int(
            "BOOKRECORDS_MAX_IMAGE_BYTES", AppConfig.max_image_bytes
        ),
        "return_warning_days": _env_int(
            "BOOKRECORDS_RETURN_WARNING_DAYS", AppConfig.return_warning_days
        ),
        "deadline_warning_days": _env_int(
            "BOOKRECORDS_DEADLINE_WARNING_DAYS", AppConfig.deadline_warning_days
        ),
        "log_level": os.getenv("BOOKRECORDS_LOG_LEVEL", AppConfig.log_level).upper(),
    }
    export_dir = os.getenv("BOOKRECORDS_EXPORT_DIR")
    if export_dir:
        values["export_dir"] = Path(export_dir).expanduser()
    values.update(overrides)
    return AppConfig(**values)
