"""Tests for configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from bookrecords.config import AppConfig, load_config


class TestAppConfig:
    def test_defaults(self, tmp_path: Path):
        config = AppConfig(data_dir=tmp_path / "data", config_dir=tmp_path / "config")
        assert config.storage_quota_bytes == 5 * 1024 * 1024
        assert config.max_image_bytes == 500_000
        assert config.return_warning_days == 3
        assert config.deadline_warning_days == 5
        assert config.log_level == "INFO"
        assert config.db_path == tmp_path / "data" / "bookrecords.db"
        assert config.log_path == tmp_path / "data" / "bookrecords.log"

    def test_dirs_created(self, tmp_path: Path):
        data = tmp_path / "data"
        conf = tmp_path / "config"
        AppConfig(data_dir=data, config_dir=conf)
        assert data.exists()
        assert conf.exists()


class TestLoadConfig:
    def _load(self, tmp_path: Path, env_text: str) -> AppConfig:
        env_file = tmp_path / ".env"
        env_file.write_text(env_text)
        return load_config(
            env_path=env_file,
            data_dir=tmp_path / "data",
            config_dir=tmp_path / "config",
        )

    def test_load_from_env_file(self, tmp_path: Path, clean_env: pytest.MonkeyPatch):
        config = self._load(
            tmp_path,
            "BOOKRECORDS_STORAGE_QUOTA=1024\n"
            "BOOKRECORDS_MAX_IMAGE_BYTES=2048\n"
            "BOOKRECORDS_RETURN_WARNING_DAYS=7\n"
            "BOOKRECORDS_DEADLINE_WARNING_DAYS=10\n"
            "BOOKRECORDS_LOG_LEVEL=debug\n"
            f"BOOKRECORDS_EXPORT_DIR={tmp_path / 'exports'}\n",
        )
        assert config.storage_quota_bytes == 1024
        assert config.max_image_bytes == 2048
        assert config.return_warning_days == 7
        assert config.deadline_warning_days == 10
        assert config.log_level == "DEBUG"
        assert config.export_dir == tmp_path / "exports"

    def test_empty_env_file_uses_defaults(self, tmp_path: Path, clean_env: pytest.MonkeyPatch):
        config = self._load(tmp_path, "")
        assert config.storage_quota_bytes == AppConfig.storage_quota_bytes
        assert config.export_dir == Path.home()

    def test_bad_integer_falls_back(self, tmp_path: Path, clean_env: pytest.MonkeyPatch):
        clean_env.setenv("BOOKRECORDS_RETURN_WARNING_DAYS", "soon")
        config = self._load(tmp_path, "")
        assert config.return_warning_days == 3

    def test_environment_wins_over_file(self, tmp_path: Path, clean_env: pytest.MonkeyPatch):
        clean_env.setenv("BOOKRECORDS_STORAGE_QUOTA", "99")
        config = self._load(tmp_path, "BOOKRECORDS_STORAGE_QUOTA=1024\n")
        assert config.storage_quota_bytes == 99
