"""Shared pytest fixtures.

Every test starts from default settings: PORTABLE_SQL_* variables from the
outer environment are removed and the cached Settings instance is reset.
"""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from portable_sql.config import get_settings
from portable_sql.config.settings import Settings

ENV_PREFIX = "PORTABLE_SQL_"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear PORTABLE_SQL_* variables and the settings cache around each test."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    # A stray .env file in the working directory must not leak into tests
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def configure(monkeypatch: pytest.MonkeyPatch):
    """Set PORTABLE_SQL_* variables and reset the settings cache."""

    def _configure(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(f"{ENV_PREFIX}{key.upper()}", value)
        get_settings.cache_clear()

    return _configure
