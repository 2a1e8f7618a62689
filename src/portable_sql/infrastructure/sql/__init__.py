"""
SQL generation infrastructure.

Exports identifier quoting, parameter binding, dialects and the expression
model. The query builder lives in ``portable_sql.infrastructure.sql.operations``.
"""

from .core import (
    ParameterBinder,
    is_quoted,
    quote_column_name,
    quote_identifier,
    quote_string,
)
from .dialects import (
    Dialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    get_dialect,
    list_dialects,
    register_dialect,
)
from .expressions import (
    BetweenColumns,
    BetweenValue,
    Comparison,
    Conjunction,
    Exists,
    Expression,
    ExpressionBuilder,
    ExpressionBuilderRegistry,
    ExpressionKind,
    HashCondition,
    InList,
    Like,
    Negation,
    RawExpression,
    Statement,
    and_,
    not_,
    or_,
)

__all__ = [
    "ParameterBinder",
    "is_quoted",
    "quote_column_name",
    "quote_identifier",
    "quote_string",
    "Dialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "get_dialect",
    "list_dialects",
    "register_dialect",
    "BetweenColumns",
    "BetweenValue",
    "Comparison",
    "Conjunction",
    "Exists",
    "Expression",
    "ExpressionBuilder",
    "ExpressionBuilderRegistry",
    "ExpressionKind",
    "HashCondition",
    "InList",
    "Like",
    "Negation",
    "RawExpression",
    "Statement",
    "and_",
    "not_",
    "or_",
]
