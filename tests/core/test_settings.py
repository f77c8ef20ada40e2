"""Tests for core.settings module.

Covers:
- FunkySettings defaults
- FUNKY_* environment variable override
- log level validation
- get_settings caching
"""

import pytest
from pydantic import ValidationError

from funky.core.settings import FunkySettings, get_settings, normalize_log_level


class TestFunkySettingsDefaults:
    def test_default_log_level(self):
        assert FunkySettings().log_level == "WARNING"

    def test_default_log_json_auto(self):
        assert FunkySettings().log_json is None

    def test_default_service(self):
        assert FunkySettings().service == "funky"


class TestFunkySettingsEnvOverride:
    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("FUNKY_LOG_LEVEL", "debug")
        assert FunkySettings().log_level == "DEBUG"

    def test_log_json_from_env(self, monkeypatch):
        monkeypatch.setenv("FUNKY_LOG_JSON", "true")
        assert FunkySettings().log_json is True

    def test_service_from_env(self, monkeypatch):
        monkeypatch.setenv("FUNKY_SERVICE", "billing")
        assert FunkySettings().service == "billing"

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert FunkySettings().log_level == "WARNING"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("FUNKY_SERVICE=from-dotenv\n")
        assert FunkySettings().service == "from-dotenv"


class TestFunkySettingsValidation:
    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            FunkySettings(log_level="LOUD")

    def test_empty_service_rejected(self):
        with pytest.raises(ValidationError):
            FunkySettings(service="")


class TestNormalizeLogLevel:
    def test_uppercases(self):
        assert normalize_log_level("info") == "INFO"

    def test_unknown_level_is_value_error(self):
        with pytest.raises(ValueError, match="unknown log level"):
            normalize_log_level("bogus")


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("FUNKY_SERVICE", "other")
        get_settings.cache_clear()
        assert get_settings() is not first
        assert get_settings().service == "other"
