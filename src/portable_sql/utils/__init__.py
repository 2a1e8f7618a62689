"""Shared utilities."""

from .logging import bind_context, get_logger, sanitize_for_logging

__all__ = [
    "get_logger",
    "bind_context",
    "sanitize_for_logging",
]
