"""Tests for Settings validation and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from config import Settings, get_system_info, initialize_logging


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.database_url.startswith("sqlite")
        assert settings.api_base_url is None
        assert settings.display_timezone == "UTC"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./other.db"
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Log level"):
            Settings(log_level="LOUD", _env_file=None)

    def test_invalid_timezone(self):
        with pytest.raises(ValidationError, match="Unknown time zone"):
            Settings(display_timezone="Mars/Olympus_Mons", _env_file=None)

    def test_non_positive_timeout(self):
        with pytest.raises(ValidationError, match="timeout"):
            Settings(client_timeout=0, _env_file=None)

    def test_cors_origin_list(self):
        settings = Settings(cors_origins="https://a.example, https://b.example,", _env_file=None)

        assert settings.cors_origin_list == ["https://a.example", "https://b.example"]


def test_system_info_reports_missing_database():
    info = get_system_info(Settings(database_url="", _env_file=None))

    assert info["database_configured"] is False
    assert info["api_base_url"] == "in-process"


def test_initialize_logging_quiets_http_loggers():
    initialize_logging(Settings(_env_file=None))

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("uvicorn").level == logging.WARNING
