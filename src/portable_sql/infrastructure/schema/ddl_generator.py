"""DDL SQL generation for tables, columns and indexes.

Column definitions may be abstract type strings or ColumnSchemaBuilder
instances; both are converted to physical types by the dialect.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from portable_sql.infrastructure.sql.dialects import Dialect


def _column_type_to_sql(column_type: Any, dialect: Dialect) -> str:
    """Convert an abstract type or ColumnSchemaBuilder to a physical SQL type."""
    return dialect.get_column_type(str(column_type))


def generate_create_table_ddl(
    table: str,
    columns: Mapping[Union[str, int], Any],
    dialect: Dialect,
    options: Optional[str] = None,
) -> str:
    """Generate a CREATE TABLE statement.

    String keys name columns; values under non-string keys (e.g. a table
    constraint like ``PRIMARY KEY (a, b)``) are emitted verbatim.
    """
    lines: List[str] = []
    for name, definition in columns.items():
        if isinstance(name, str):
            quoted_name = dialect.quote_column(name)
            lines.append(f"\t{quoted_name} {_column_type_to_sql(definition, dialect)}")
        else:
            lines.append(f"\t{definition}")

    sql = f"CREATE TABLE {dialect.quote_table(table)} (\n" + ",\n".join(lines) + "\n)"
    if options:
        sql = f"{sql} {options}"
    return sql


def generate_drop_table_ddl(
    table: str, dialect: Dialect, if_exists: bool = False, cascade: bool = False
) -> str:
    """Generate a DROP TABLE statement."""
    exists_clause = "IF EXISTS " if if_exists else ""
    cascade_clause = " CASCADE" if cascade else ""
    return f"DROP TABLE {exists_clause}{dialect.quote_table(table)}{cascade_clause}"


def generate_add_column_ddl(
    table: str, column: str, column_type: Any, dialect: Dialect
) -> str:
    """Generate an ALTER TABLE ... ADD COLUMN statement."""
    return (
        f"ALTER TABLE {dialect.quote_table(table)} ADD COLUMN "
        f"{dialect.quote_column(column)} {_column_type_to_sql(column_type, dialect)}"
    )


def generate_create_index_ddl(
    name: str,
    table: str,
    columns: Sequence[str],
    dialect: Dialect,
    unique: bool = False,
) -> str:
    """Generate a CREATE INDEX statement."""
    cols_str = ", ".join(dialect.quote_column(c) for c in columns)
    unique_str = "UNIQUE " if unique else ""
    return (
        f"CREATE {unique_str}INDEX {dialect.quote(name)} "
        f"ON {dialect.quote_table(table)} ({cols_str})"
    )


__all__ = [
    "generate_create_table_ddl",
    "generate_drop_table_ddl",
    "generate_add_column_ddl",
    "generate_create_index_ddl",
]
