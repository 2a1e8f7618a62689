"""
Dialect-independent SQL formatting.

A dialect is the strategy object that owns everything a target database may
format differently: identifier quoting, string literals in DDL, the mapping
of abstract column types to physical ones, LIMIT/OFFSET syntax and the
column-schema extension hooks (unsigned, comment, position). The base class
is the generic dialect; its hooks return empty strings, which is valid SQL
for engines without those features.
"""

import re
from typing import Dict, Mapping, Optional, Sequence

from portable_sql.exceptions import SqlBuilderError, UnsupportedDialectError
from portable_sql.infrastructure.schema.core import TypeCategory

from ..core.identifier import quote_column_name, quote_identifier, quote_string

PK_TEMPLATE = "{type}{check}{comment}{append}"
DEFAULT_TEMPLATE = "{type}{length}{notnull}{unique}{default}{check}{comment}{append}"

_TYPE_WITH_LENGTH = re.compile(r"^(\w+)\((.+?)\)(.*)$", re.DOTALL)
_TYPE_WITH_SUFFIX = re.compile(r"^(\w+)\s+")
_LENGTH = re.compile(r"\(.+\)")


class Dialect:
    """Generic SQL dialect: ANSI-style quoting and no optional extensions."""

    name = "generic"

    type_map: Mapping[str, str] = {
        "pk": "integer NOT NULL PRIMARY KEY",
        "upk": "integer NOT NULL PRIMARY KEY",
        "bigpk": "bigint NOT NULL PRIMARY KEY",
        "ubigpk": "bigint NOT NULL PRIMARY KEY",
        "char": "char(1)",
        "string": "varchar(255)",
        "text": "text",
        "tinyint": "smallint",
        "smallint": "smallint",
        "integer": "integer",
        "bigint": "bigint",
        "float": "float",
        "double": "double precision",
        "decimal": "decimal(10,0)",
        "datetime": "timestamp",
        "timestamp": "timestamp",
        "time": "time",
        "date": "date",
        "binary": "blob",
        "boolean": "boolean",
        "money": "decimal(19,4)",
        "json": "text",
    }

    # Escape character appended to LIKE conditions, None when the engine has a default
    like_escape_character: Optional[str] = None

    def quote(self, identifier: str) -> str:
        """Quote a single identifier."""
        return quote_identifier(identifier, dialect=self.name)

    def quote_column(self, name: str) -> str:
        """Quote a column name that may carry a table prefix."""
        return quote_column_name(name, dialect=self.name)

    def quote_table(self, table: str) -> str:
        """Quote a table name, honouring a ``schema.table`` prefix."""
        return self.quote_column(table)

    def quote_value(self, value: str) -> str:
        """Quote a string literal for DDL fragments that cannot be bound."""
        return quote_string(value)

    # ------------------------------------------------------------------
    # Column schema hooks
    # ------------------------------------------------------------------

    def column_template(self, category: TypeCategory) -> str:
        """Return the column definition template for a type category."""
        if category == TypeCategory.PK:
            return PK_TEMPLATE
        return DEFAULT_TEMPLATE

    def build_unsigned(self) -> str:
        return ""

    def build_comment(self, comment: str) -> str:
        return ""

    def build_first(self) -> str:
        return ""

    def build_after(self, column: str) -> str:
        return ""

    def build_default_string(self, value: str) -> str:
        """Render a plain string default. The generic dialect does not escape."""
        return f"'{value}'"

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def build_limit(self, limit: Optional[int], offset: Optional[int]) -> str:
        """Render the LIMIT/OFFSET clause, or an empty string."""
        parts = []
        if limit is not None:
            parts.append(f"LIMIT {int(limit)}")
        if offset:
            parts.append(f"OFFSET {int(offset)}")
        return " ".join(parts)

    def build_empty_insert(self, quoted_table: str) -> str:
        """INSERT of a row that takes every column default."""
        return f"INSERT INTO {quoted_table} DEFAULT VALUES"

    def build_upsert(
        self,
        insert_sql: str,
        table: str,
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
        null_guard: bool = False,
    ) -> str:
        """Extend an INSERT statement with conflict handling."""
        raise SqlBuilderError(f"Dialect '{self.name}' does not support upsert")

    def build_like_escape(self) -> str:
        if self.like_escape_character is None:
            return ""
        return f" ESCAPE {quote_string(self.like_escape_character)}"

    def get_column_type(self, column_type: str) -> str:
        """
        Convert an abstract column type into a physical column type.

        A type found in ``type_map`` is replaced as a whole. ``string(64)``
        keeps its own length in place of the default one, and a type followed
        by constraints (``string NOT NULL``) has only its leading word mapped.
        Anything else is returned unchanged.

        Examples:
            >>> Dialect().get_column_type("string(64) NOT NULL")
            'varchar(64) NOT NULL'
            >>> Dialect().get_column_type("pk")
            'integer NOT NULL PRIMARY KEY'
        """
        column_type = str(column_type)
        if column_type in self.type_map:
            return self.type_map[column_type]

        match = _TYPE_WITH_LENGTH.match(column_type)
        if match:
            base, length, rest = match.groups()
            if base in self.type_map:
                physical = _LENGTH.sub(f"({length})", self.type_map[base], count=1)
                return f"{physical}{rest}"
            return column_type

        match = _TYPE_WITH_SUFFIX.match(column_type)
        if match and match.group(1) in self.type_map:
            return self.type_map[match.group(1)] + column_type[match.end(1):]
        return column_type

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


_DIALECT_REGISTRY: Dict[str, Dialect] = {}


def register_dialect(dialect: Dialect, replace: bool = False) -> None:
    """Register a dialect instance under its name."""
    if dialect.name in _DIALECT_REGISTRY and not replace:
        raise ValueError(
            f"Dialect '{dialect.name}' is already registered. "
            "Pass replace=True to override it."
        )
    _DIALECT_REGISTRY[dialect.name] = dialect


def get_dialect(name: str) -> Dialect:
    """Retrieve a dialect from the registry by name."""
    key = name.strip().lower()
    if key not in _DIALECT_REGISTRY:
        raise UnsupportedDialectError(name, list_dialects())
    return _DIALECT_REGISTRY[key]


def list_dialects() -> list[str]:
    """List all registered dialect names."""
    return sorted(_DIALECT_REGISTRY.keys())
