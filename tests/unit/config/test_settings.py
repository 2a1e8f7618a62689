"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from portable_sql.config import Settings, get_settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.dialect == "generic"
        assert settings.param_prefix == "p"
        assert settings.log_level == "INFO"
        assert settings.log_json is True

    def test_environment_overrides(self, configure):
        configure(dialect="mysql", param_prefix="arg", log_level="debug", log_json="false")

        settings = get_settings()

        assert settings.dialect == "mysql"
        assert settings.param_prefix == "arg"
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False

    def test_dialect_is_normalized(self, configure):
        configure(dialect="  PostgreSQL ")
        assert get_settings().dialect == "postgresql"

    @pytest.mark.parametrize("prefix", ["", "1p", "p-"])
    def test_invalid_param_prefix(self, prefix):
        with pytest.raises(ValidationError):
            Settings(param_prefix=prefix)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_reloads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("PORTABLE_SQL_DIALECT", "sqlite")
        get_settings.cache_clear()

        assert get_settings() is not first
        assert get_settings().dialect == "sqlite"
