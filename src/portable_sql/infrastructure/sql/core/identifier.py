"""
SQL identifier handling utilities.

Provides functions for proper quoting of SQL identifiers
(table names, column names) to prevent SQL injection through names.
"""

# Opening quote -> closing quote for each supported dialect
_QUOTE_CHARS = {
    "mysql": ("`", "`"),
}
_DEFAULT_QUOTES = ('"', '"')


def _quote_chars(dialect: str) -> tuple[str, str]:
    return _QUOTE_CHARS.get(dialect, _DEFAULT_QUOTES)


def quote_identifier(name: str, dialect: str = "generic") -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        dialect: Database dialect ("generic", "postgresql", "sqlite", "mysql")

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("company_id")
        '"company_id"'
        >>> quote_identifier("table", dialect="mysql")
        '`table`'
    """
    start, end = _quote_chars(dialect)
    # Escape the closing quote character by doubling it
    escaped = name.replace(end, end * 2)
    return f"{start}{escaped}{end}"


def is_quoted(name: str, dialect: str = "generic") -> bool:
    """Return True when ``name`` is already wrapped in the dialect's quotes."""
    start, end = _quote_chars(dialect)
    return len(name) >= 2 and name.startswith(start) and name.endswith(end)


def quote_column_name(name: str, dialect: str = "generic") -> str:
    """
    Quote a possibly table-prefixed column name.

    Each dot-separated part is quoted on its own. ``*`` and parts that are
    already quoted are left as they are.

    Examples:
        >>> quote_column_name("users.email")
        '"users"."email"'
        >>> quote_column_name("u.*")
        '"u".*'
    """
    parts = []
    for part in name.split("."):
        if part == "*" or is_quoted(part, dialect):
            parts.append(part)
        else:
            parts.append(quote_identifier(part, dialect))
    return ".".join(parts)


def quote_string(value: str) -> str:
    """
    Quote a string literal by doubling embedded single quotes.

    Only used for DDL fragments (comments, MySQL defaults) that cannot be
    parameterized.

    Examples:
        >>> quote_string("it's")
        "'it''s'"
    """
    escaped = value.replace("'", "''")
    return f"'{escaped}'"
