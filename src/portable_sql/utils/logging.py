"""Structured logging framework using structlog.

This module provides centralized logging configuration with:
- ISO-8601 timestamps
- JSON rendering for structured logs
- Automatic redaction of bound parameter values and credentials
- Context binding support

Configuration is loaded from portable_sql.config.settings:
- PORTABLE_SQL_LOG_LEVEL: Set log level (DEBUG, INFO, ...). Default: INFO
- PORTABLE_SQL_LOG_JSON: Render JSON (default) or console output

Usage:
    >>> from portable_sql.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("statement_built", param_count=2)
"""

import logging
import os
import re
from typing import Any, Dict, MutableMapping

import structlog
from structlog.types import EventDict, Processor

from portable_sql.config import get_settings

# Bound values may carry user data; only placeholder names are safe to log
SENSITIVE_PATTERNS = [
    re.compile(r"^params$", re.IGNORECASE),
    re.compile(r"^values?$", re.IGNORECASE),
    re.compile(r".*password.*", re.IGNORECASE),
    re.compile(r".*token.*", re.IGNORECASE),
    re.compile(r".*secret.*", re.IGNORECASE),
]

REDACTED_VALUE = "[REDACTED]"


def sanitize_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a dictionary before logging.

    Args:
        data: Dictionary that may contain bound values or credentials

    Returns:
        New dictionary with sensitive values replaced by [REDACTED]

    Example:
        >>> sanitize_for_logging({"params": {"p0": "alice"}, "sql": "..."})
        {'params': '[REDACTED]', 'sql': '...'}
    """
    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if any(pattern.match(key) for pattern in SENSITIVE_PATTERNS):
            sanitized[key] = REDACTED_VALUE
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitization_processor(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Structlog processor that redacts sensitive fields in event_dict."""
    return sanitize_for_logging(dict(event_dict))


def _get_log_level() -> int:
    """Get log level from settings, falling back to the raw environment."""
    try:
        level_name = get_settings().log_level
    except Exception:
        # Invalid settings must not prevent logging from coming up
        level_name = os.getenv("PORTABLE_SQL_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _use_json_renderer() -> bool:
    try:
        return get_settings().log_json
    except Exception:
        return True


def _configure_structlog() -> None:
    """Configure structlog with timestamps, sanitization and rendering."""
    logging.basicConfig(format="%(message)s", level=_get_log_level())

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if _use_json_renderer()
        else structlog.dev.ConsoleRenderer()
    )
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        sanitization_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog on module import
_configure_structlog()


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger configured with sanitization
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Create a logger with bound context fields.

    Example:
        >>> logger = bind_context(dialect="mysql", table="users")
        >>> logger.debug("column_rendered", column="email")
    """
    return structlog.get_logger().bind(**kwargs)
