"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL type mapping and INSERT ... ON CONFLICT upserts.
Column comments are set with separate COMMENT ON statements in PostgreSQL,
so the inline comment hook stays empty.
"""

from typing import List, Sequence

from portable_sql.exceptions import SqlBuilderError

from .base import Dialect


class PostgreSQLDialect(Dialect):
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"

    type_map = {
        "pk": "serial NOT NULL PRIMARY KEY",
        "upk": "serial NOT NULL PRIMARY KEY",
        "bigpk": "bigserial NOT NULL PRIMARY KEY",
        "ubigpk": "bigserial NOT NULL PRIMARY KEY",
        "char": "char(1)",
        "string": "varchar(255)",
        "text": "text",
        "tinyint": "smallint",
        "smallint": "smallint",
        "integer": "integer",
        "bigint": "bigint",
        "float": "double precision",
        "double": "double precision",
        "decimal": "numeric(10,0)",
        "datetime": "timestamp(0)",
        "timestamp": "timestamp(0)",
        "time": "time(0)",
        "date": "date",
        "binary": "bytea",
        "boolean": "boolean",
        "money": "numeric(19,4)",
        "json": "jsonb",
    }

    def build_default_string(self, value: str) -> str:
        return self.quote_value(value)

    def build_upsert(
        self,
        insert_sql: str,
        table: str,
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
        null_guard: bool = False,
    ) -> str:
        """
        Extend an INSERT statement with an ON CONFLICT clause.

        Args:
            insert_sql: Rendered INSERT statement
            table: Table name (used to reference existing values)
            conflict_columns: Columns for conflict detection (usually primary key)
            update_columns: Columns to update on conflict; empty means DO NOTHING
            null_guard: If True, only update columns whose existing value is NULL

        Returns:
            INSERT ... ON CONFLICT SQL statement
        """
        if not conflict_columns:
            if update_columns:
                raise SqlBuilderError("ON CONFLICT DO UPDATE needs conflict columns")
            return f"{insert_sql} ON CONFLICT DO NOTHING"

        conflict_cols = ", ".join(self.quote(c) for c in conflict_columns)
        if not update_columns:
            return f"{insert_sql} ON CONFLICT ({conflict_cols}) DO NOTHING"

        quoted_table = self.quote_table(table)
        assignments: List[str] = []
        for col in update_columns:
            quoted = self.quote(col)
            if null_guard:
                assignments.append(
                    f"{quoted} = CASE WHEN {quoted_table}.{quoted} IS NULL "
                    f"THEN EXCLUDED.{quoted} ELSE {quoted_table}.{quoted} END"
                )
            else:
                assignments.append(f"{quoted} = EXCLUDED.{quoted}")

        update_set = ", ".join(assignments)
        return f"{insert_sql} ON CONFLICT ({conflict_cols}) DO UPDATE SET {update_set}"
