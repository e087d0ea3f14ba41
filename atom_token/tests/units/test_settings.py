"""Tests for settings."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from atom_token.exceptions import AppSettingsError
from atom_token.settings import (
    AppSettings,
    DBSettings,
    LogSettings,
    default_app_settings,
    get_app_settings,
    write_default_config,
)
from atom_token.constants import LOG_LEVELS


class TestAppSettings:
    """Tests for AppSettings class."""

    def test_default_settings(self) -> None:
        settings = AppSettings(_env_file=None)  # type: ignore
        assert settings.api_docs_enabled is False
        assert settings.app_host == "0.0.0.0"
        assert settings.app_port == 8080
        assert settings.token_length == 64
        assert settings.page_size == 10
        assert settings.token_create_max_attempts is None
        assert settings.log.level == "INFO"

    @patch.dict(os.environ, {"TOKEN_LENGTH": "32", "PAGE_SIZE": "5", "APP_PORT": "9000"})
    def test_env_settings(self) -> None:
        settings = AppSettings(_env_file=None)  # type: ignore
        assert settings.token_length == 32
        assert settings.page_size == 5
        assert settings.app_port == 9000

    @pytest.mark.parametrize("field", ["token_length", "page_size"])
    def test_non_positive_values(self, field: str) -> None:
        with pytest.raises(ValueError):
            AppSettings(_env_file=None, **{field: 0})  # type: ignore

    def test_json_config(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"port": 8181, "tokenLength": 20, "pageSize": 3}))

        with patch.dict(os.environ, {"CONFIG": str(config)}):
            settings = AppSettings(_env_file=None)  # type: ignore

        assert settings.app_port == 8181
        assert settings.token_length == 20
        assert settings.page_size == 3

    def test_env_overrides_json_config(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps(
                {
                    "tokenLength": 20,
                    "db": {"host": "jsonhost", "name": "jsondb"},
                    "log": {"level": "ERROR"},
                }
            )
        )
        env = {
            "CONFIG": str(config),
            "TOKEN_LENGTH": "40",
            "DB_HOST": "envhost",
            "LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env):
            settings = AppSettings(_env_file=None)  # type: ignore

        assert settings.token_length == 40
        assert settings.db.host == "envhost"
        assert settings.db.name == "jsondb"
        assert settings.log.level == "DEBUG"

    def test_nested_json_config_without_env(self, tmp_path: Path) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"db": {"host": "jsonhost", "port": 6432}}))

        with patch.dict(os.environ, {"CONFIG": str(config)}):
            settings = AppSettings(_env_file=None)  # type: ignore

        assert settings.db.database_dsn.endswith("@jsonhost:6432/atomics")

    def test_write_default_config(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.json"

        write_default_config(path, AppSettings(_env_file=None, token_length=20))  # type: ignore

        data = json.loads(path.read_text())
        assert data["tokenLength"] == 20
        assert data["pageSize"] == 10
        assert data["port"] == 8080
        assert "token_length" not in data
        assert data["db"]["host"] == "localhost"
        with patch.dict(os.environ, {"CONFIG": str(path)}):
            assert AppSettings(_env_file=None).token_length == 20  # type: ignore

    @patch.dict(os.environ, {"TOKEN_LENGTH": "32", "DB_HOST": "db-host", "DB_PASSWORD": "secret"})
    def test_default_app_settings_ignore_env(self) -> None:
        settings = default_app_settings()

        assert settings.token_length == 64
        assert settings.db.host == "localhost"
        assert settings.db.password == "postgres"
        assert settings.log.level == "INFO"


class TestDBSettings:

    def test_dsn_from_parts(self) -> None:
        settings = DBSettings(_env_file=None, host="db", user="bob", password="pwd")  # type: ignore
        assert settings.database_dsn == "postgresql+asyncpg://bob:pwd@db:5432/atomics"

    def test_dsn_override(self) -> None:
        settings = DBSettings(_env_file=None, dsn="sqlite+aiosqlite:///tokens.db")  # type: ignore
        assert settings.database_dsn == "sqlite+aiosqlite:///tokens.db"

    @patch.dict(os.environ, {"DB_HOST": "db-host", "DB_PORT": "6432"})
    def test_env(self) -> None:
        settings = DBSettings(_env_file=None)  # type: ignore
        assert settings.database_dsn.endswith("@db-host:6432/atomics")


class TestLogSettings:

    @pytest.mark.parametrize("log_level", LOG_LEVELS.split("|"))
    def test_valid_log_levels(self, log_level: str) -> None:
        settings = LogSettings(_env_file=None, level=log_level.lower())  # type: ignore
        assert settings.level == log_level

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            LogSettings(_env_file=None, level="INVALID")  # type: ignore

    def test_log_config(self) -> None:
        log_config = LogSettings(_env_file=None, level="DEBUG").log_config  # type: ignore
        assert log_config["version"] == 1
        assert "standard" in log_config["formatters"]
        assert "console" in log_config["handlers"]
        assert all(
            log_config["loggers"][logger]["level"] == "DEBUG"
            for logger in ["atom_token", "fastapi", "uvicorn.access", "uvicorn.error"]
        )


class TestGetSettings:

    @patch.dict(os.environ, {"PAGE_SIZE": "7"})
    def test_get_app_settings(self) -> None:
        assert get_app_settings().page_size == 7

    @patch.dict(os.environ, {"TOKEN_LENGTH": "not-a-number"})
    def test_invalid_settings(self) -> None:
        with pytest.raises(AppSettingsError) as exc_info:
            get_app_settings()

        assert "Unable to validate settings" in exc_info.value.message

    def test_missing_config_created(self, tmp_path: Path) -> None:
        config = tmp_path / "sub" / "c.json"

        with patch.dict(os.environ, {"CONFIG": str(config), "DB_HOST": "db-host"}):
            settings = get_app_settings()

        assert config.exists()
        data = json.loads(config.read_text())
        assert data["tokenLength"] == 64
        assert data["pageSize"] == 10
        assert data["port"] == 8080
        assert data["db"]["host"] == "localhost"
        assert settings.token_length == 64
        assert settings.db.host == "db-host"

    def test_existing_config_kept(self, tmp_path: Path) -> None:
        config = tmp_path / "c.json"
        config.write_text(json.dumps({"pageSize": 3}))

        with patch.dict(os.environ, {"CONFIG": str(config)}):
            assert get_app_settings().page_size == 3

        assert json.loads(config.read_text()) == {"pageSize": 3}

    def test_config_cannot_be_created(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")

        with patch.dict(os.environ, {"CONFIG": str(blocker / "c.json")}):
            with pytest.raises(AppSettingsError) as exc_info:
                get_app_settings()

        assert "Unable to create config" in exc_info.value.message
