"""
portable_sql - Dialect-portable SQL expression and schema-definition builder.

Turns in-memory condition objects and column definitions into parameterized
SQL text, deferring database-specific formatting to pluggable dialects.

Example:
    >>> from portable_sql import BetweenColumns, QueryBuilder
    >>> QueryBuilder("postgresql").render(BetweenColumns(5, "BETWEEN", "a", "b"))
    (':p0 BETWEEN "a" AND "b"', {'p0': 5})
"""

from portable_sql.exceptions import (
    ExpressionRegistryError,
    InvalidConditionError,
    SqlBuilderError,
    UnregisteredExpressionError,
    UnsupportedDialectError,
)
from portable_sql.infrastructure.sql import (
    BetweenColumns,
    BetweenValue,
    Comparison,
    Conjunction,
    Dialect,
    Exists,
    Expression,
    HashCondition,
    InList,
    Like,
    Negation,
    ParameterBinder,
    RawExpression,
    and_,
    get_dialect,
    not_,
    or_,
    register_dialect,
)
from portable_sql.infrastructure.sql.operations import Query, QueryBuilder
from portable_sql.infrastructure.schema.core import ColumnType, TypeCategory
from portable_sql.infrastructure.schema.column_builder import ColumnSchemaBuilder

__version__ = "0.1.0"

__all__ = [
    "SqlBuilderError",
    "UnregisteredExpressionError",
    "ExpressionRegistryError",
    "UnsupportedDialectError",
    "InvalidConditionError",
    "BetweenColumns",
    "BetweenValue",
    "Comparison",
    "Conjunction",
    "Exists",
    "Expression",
    "HashCondition",
    "InList",
    "Like",
    "Negation",
    "RawExpression",
    "and_",
    "or_",
    "not_",
    "Dialect",
    "get_dialect",
    "register_dialect",
    "ParameterBinder",
    "Query",
    "QueryBuilder",
    "ColumnType",
    "TypeCategory",
    "ColumnSchemaBuilder",
]
