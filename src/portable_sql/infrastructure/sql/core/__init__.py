"""Core SQL utilities package."""

from .identifier import (
    is_quoted,
    quote_column_name,
    quote_identifier,
    quote_string,
)
from .parameters import ParameterBinder

__all__ = [
    "quote_identifier",
    "quote_column_name",
    "quote_string",
    "is_quoted",
    "ParameterBinder",
]
