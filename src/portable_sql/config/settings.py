"""
Configuration management for portable_sql.

Settings are read from environment variables (prefix ``PORTABLE_SQL_``) and an
optional ``.env`` file using Pydantic BaseSettings, so a deployment can pick
the target dialect and placeholder naming without code changes.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    Environment variables are loaded with the PORTABLE_SQL_ prefix.
    For example, PORTABLE_SQL_DIALECT=mysql selects the MySQL dialect for
    builders created without an explicit dialect.
    """

    dialect: str = Field(
        default="generic",
        description="Name of the dialect used when none is passed explicitly",
    )
    param_prefix: str = Field(
        default="p",
        description="Prefix for generated placeholder names (p -> :p0, :p1, ...)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level (uppercase)",
    )
    log_json: bool = Field(
        default=True,
        description="Render log events as JSON; console rendering otherwise",
    )

    model_config = SettingsConfigDict(
        env_prefix="PORTABLE_SQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("dialect")
    @classmethod
    def _normalize_dialect(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("param_prefix")
    @classmethod
    def _validate_param_prefix(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(
                f"param_prefix must be a valid identifier prefix, got {value!r}"
            )
        return value


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Call ``get_settings.cache_clear()`` after changing the environment (tests
    do this through a fixture) to pick up new values.

    Returns:
        Settings instance
    """
    return Settings()
