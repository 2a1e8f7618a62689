"""Exceptions raised by portable_sql builders.

Only programming and configuration errors surface as exceptions. Malformed
lengths, unknown abstract types and unusual operator strings render as given
and are left for the database to reject.
"""


class SqlBuilderError(Exception):
    """Base class for all portable_sql errors."""


class UnregisteredExpressionError(SqlBuilderError, LookupError):
    """Raised when no condition builder is registered for an expression tag."""

    def __init__(self, kind: str, available: list[str]):
        self.kind = kind
        self.available = available
        super().__init__(
            f"No condition builder registered for expression '{kind}'. "
            f"Available: {available}"
        )


class ExpressionRegistryError(SqlBuilderError):
    """Raised when a registry is constructed without a builder for every variant."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Expression registry is incomplete, missing builders for: {missing}"
        )


class UnsupportedDialectError(SqlBuilderError, KeyError):
    """Raised when a dialect name is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Dialect '{name}' not found. Available: {available}")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidConditionError(SqlBuilderError, ValueError):
    """Raised for structurally impossible conditions (e.g. an empty hash)."""
