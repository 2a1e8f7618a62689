"""SQLite-specific SQL dialect implementation."""

from typing import Optional

from .postgresql import PostgreSQLDialect


class SQLiteDialect(PostgreSQLDialect):
    """
    SQLite dialect.

    SQLite shares PostgreSQL's ON CONFLICT upsert syntax but has no default
    escape character for LIKE and needs ``LIMIT -1`` to express an offset
    without a limit.
    """

    name = "sqlite"

    type_map = {
        "pk": "integer PRIMARY KEY AUTOINCREMENT NOT NULL",
        "upk": "integer PRIMARY KEY AUTOINCREMENT NOT NULL",
        "bigpk": "integer PRIMARY KEY AUTOINCREMENT NOT NULL",
        "ubigpk": "integer PRIMARY KEY AUTOINCREMENT NOT NULL",
        "char": "char(1)",
        "string": "varchar(255)",
        "text": "text",
        "tinyint": "tinyint",
        "smallint": "smallint",
        "integer": "integer",
        "bigint": "bigint",
        "float": "float",
        "double": "double",
        "decimal": "decimal(10,0)",
        "datetime": "datetime",
        "timestamp": "timestamp",
        "time": "time",
        "date": "date",
        "binary": "blob",
        "boolean": "boolean",
        "money": "decimal(19,4)",
        "json": "text",
    }

    like_escape_character = "\\"

    def build_limit(self, limit: Optional[int], offset: Optional[int]) -> str:
        if offset and limit is None:
            return f"LIMIT -1 OFFSET {int(offset)}"
        return super().build_limit(limit, offset)
