"""SQL dialects and the dialect registry."""

from .base import Dialect, get_dialect, list_dialects, register_dialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect

for _dialect in (Dialect(), PostgreSQLDialect(), MySQLDialect(), SQLiteDialect()):
    register_dialect(_dialect, replace=True)

__all__ = [
    "Dialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "SQLiteDialect",
    "get_dialect",
    "list_dialects",
    "register_dialect",
]
