"""
MySQL-specific SQL dialect implementation.

MySQL supports every column-schema extension: UNSIGNED numeric types,
inline COMMENT and FIRST/AFTER positioning when altering tables.
"""

from typing import Optional, Sequence

from portable_sql.exceptions import SqlBuilderError
from portable_sql.infrastructure.schema.core import TypeCategory

from .base import Dialect

_PK_TEMPLATE = "{type}{comment}{check}{append}{pos}"
_NUMERIC_TEMPLATE = (
    "{type}{length}{unsigned}{notnull}{unique}{default}{comment}{check}{append}{pos}"
)
_DEFAULT_TEMPLATE = "{type}{length}{notnull}{unique}{default}{comment}{check}{append}{pos}"

# Offset without a limit needs the largest unsigned BIGINT as limit
_MAX_LIMIT = 18446744073709551615


class MySQLDialect(Dialect):
    """MySQL SQL dialect implementation."""

    name = "mysql"

    type_map = {
        "pk": "int(11) NOT NULL AUTO_INCREMENT PRIMARY KEY",
        "upk": "int(10) UNSIGNED NOT NULL AUTO_INCREMENT PRIMARY KEY",
        "bigpk": "bigint(20) NOT NULL AUTO_INCREMENT PRIMARY KEY",
        "ubigpk": "bigint(20) UNSIGNED NOT NULL AUTO_INCREMENT PRIMARY KEY",
        "char": "char(1)",
        "string": "varchar(255)",
        "text": "text",
        "tinyint": "tinyint(3)",
        "smallint": "smallint(6)",
        "integer": "int(11)",
        "bigint": "bigint(20)",
        "float": "float",
        "double": "double",
        "decimal": "decimal(10,0)",
        "datetime": "datetime",
        "timestamp": "timestamp",
        "time": "time",
        "date": "date",
        "binary": "blob",
        "boolean": "tinyint(1)",
        "money": "decimal(19,4)",
        "json": "json",
    }

    def quote_value(self, value: str) -> str:
        # Backslash is an escape character inside MySQL string literals
        escaped = value.replace("\\", "\\\\").replace("'", "''")
        return f"'{escaped}'"

    def column_template(self, category: TypeCategory) -> str:
        if category == TypeCategory.PK:
            return _PK_TEMPLATE
        if category == TypeCategory.NUMERIC:
            return _NUMERIC_TEMPLATE
        return _DEFAULT_TEMPLATE

    def build_unsigned(self) -> str:
        return " UNSIGNED"

    def build_comment(self, comment: str) -> str:
        return f" COMMENT {self.quote_value(comment)}"

    def build_first(self) -> str:
        return " FIRST"

    def build_after(self, column: str) -> str:
        return f" AFTER {self.quote_column(column)}"

    def build_default_string(self, value: str) -> str:
        return self.quote_value(value)

    def build_limit(self, limit: Optional[int], offset: Optional[int]) -> str:
        if offset and limit is None:
            return f"LIMIT {_MAX_LIMIT} OFFSET {int(offset)}"
        return super().build_limit(limit, offset)

    def build_empty_insert(self, quoted_table: str) -> str:
        return f"INSERT INTO {quoted_table} () VALUES ()"

    def build_upsert(
        self,
        insert_sql: str,
        table: str,
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
        null_guard: bool = False,
    ) -> str:
        """Extend an INSERT statement with ON DUPLICATE KEY UPDATE."""
        if not update_columns:
            if not conflict_columns:
                raise SqlBuilderError(
                    "MySQL upsert needs at least one update or conflict column"
                )
            # No-op assignment keeps the existing row untouched
            quoted = self.quote(conflict_columns[0])
            return f"{insert_sql} ON DUPLICATE KEY UPDATE {quoted} = {quoted}"

        assignments = []
        for col in update_columns:
            quoted = self.quote(col)
            if null_guard:
                assignments.append(f"{quoted} = IFNULL({quoted}, VALUES({quoted}))")
            else:
                assignments.append(f"{quoted} = VALUES({quoted})")
        return f"{insert_sql} ON DUPLICATE KEY UPDATE {', '.join(assignments)}"
