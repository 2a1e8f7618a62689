"""Configuration management for portable_sql.

Usage:
    >>> from portable_sql.config import get_settings
    >>> settings = get_settings()
    >>> settings.dialect
    'generic'
"""

from portable_sql.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
