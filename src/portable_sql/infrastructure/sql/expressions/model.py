"""Expression model for SQL conditions.

Every variant is an immutable value object carrying a ``kind`` tag. The tag,
not the object's shape, selects the condition builder that renders it (see
``registry.py``). Rendering never mutates an expression; only the shared
ParameterBinder changes during a build.

Example:
    >>> cond = and_(
    ...     Comparison("status", "=", "active"),
    ...     BetweenColumns(5, "BETWEEN", "min_qty", "max_qty"),
    ... )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional, Sequence, Tuple, Union

from portable_sql.exceptions import InvalidConditionError


class ExpressionKind(str, Enum):
    """Tags of the built-in expression variants."""

    RAW = "raw"
    COMPARISON = "comparison"
    BETWEEN = "between"
    BETWEEN_COLUMNS = "between_columns"
    IN = "in"
    LIKE = "like"
    EXISTS = "exists"
    CONJUNCTION = "conjunction"
    NOT = "not"
    HASH = "hash"

    def __str__(self) -> str:
        return self.value


class Statement:
    """Base for objects rendered as sub-queries by ``QueryBuilder.build()``."""


class Expression:
    """Base class of all expression variants."""

    kind: ClassVar[str]


# Operand accepted wherever a column is expected
ColumnOperand = Union[str, Expression, Statement]

DEFAULT_LIKE_ESCAPING: Mapping[str, str] = MappingProxyType(
    {"%": "\\%", "_": "\\_", "\\": "\\\\"}
)


def _normalize_operator(operator: str) -> str:
    return " ".join(operator.split()).upper()


def _freeze(values: Any) -> Any:
    """Turn list-like values into tuples; leave scalars and sub-queries alone."""
    if isinstance(values, (list, tuple, set, frozenset)):
        return tuple(values)
    return values


@dataclass(frozen=True)
class RawExpression(Expression):
    """
    A literal SQL fragment with its own bound parameters.

    The text is emitted verbatim; parameters are merged into the binder.
    """

    kind: ClassVar[str] = ExpressionKind.RAW.value

    sql: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __str__(self) -> str:
        return self.sql


@dataclass(frozen=True)
class Comparison(Expression):
    """``<column> <operator> <value>``; the operator is not validated."""

    kind: ClassVar[str] = ExpressionKind.COMPARISON.value

    column: ColumnOperand
    operator: str
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _normalize_operator(self.operator))


@dataclass(frozen=True)
class BetweenValue(Expression):
    """``<column> BETWEEN <start> AND <end>`` with literal or expression bounds."""

    kind: ClassVar[str] = ExpressionKind.BETWEEN.value

    column: ColumnOperand
    operator: str
    interval_start: Any
    interval_end: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _normalize_operator(self.operator))


@dataclass(frozen=True)
class BetweenColumns(Expression):
    """
    ``<value> BETWEEN <start_column> AND <end_column>``.

    A literal value is tested against an interval defined by two columns.
    Column operands may be identifiers, raw fragments containing ``(``,
    expressions or sub-queries.
    """

    kind: ClassVar[str] = ExpressionKind.BETWEEN_COLUMNS.value

    value: Any
    operator: str
    interval_start_column: ColumnOperand
    interval_end_column: ColumnOperand

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _normalize_operator(self.operator))


@dataclass(frozen=True)
class InList(Expression):
    """
    ``<column(s)> IN (<values>)`` or ``IN (<sub-query>)``.

    ``column`` may be a sequence of columns, in which case each value is a
    tuple (or mapping) with one entry per column.
    """

    kind: ClassVar[str] = ExpressionKind.IN.value

    column: Union[ColumnOperand, Sequence[str]]
    operator: str
    values: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _normalize_operator(self.operator))
        object.__setattr__(self, "column", _freeze(self.column))
        object.__setattr__(self, "values", _freeze(self.values))


@dataclass(frozen=True)
class Like(Expression):
    """
    ``<column> LIKE <value>`` for one or several values.

    String values are escaped with ``escaping_replacements`` and wrapped in
    ``%``; pass ``escaping_replacements=None`` to bind them untouched.
    """

    kind: ClassVar[str] = ExpressionKind.LIKE.value

    column: ColumnOperand
    operator: str
    value: Any
    escaping_replacements: Optional[Mapping[str, str]] = field(
        default_factory=lambda: dict(DEFAULT_LIKE_ESCAPING)
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _normalize_operator(self.operator))
        object.__setattr__(self, "value", _freeze(self.value))
        if self.escaping_replacements is not None:
            object.__setattr__(
                self,
                "escaping_replacements",
                MappingProxyType(dict(self.escaping_replacements)),
            )


@dataclass(frozen=True)
class Exists(Expression):
    """``EXISTS (<sub-query>)`` or ``NOT EXISTS (...)``."""

    kind: ClassVar[str] = ExpressionKind.EXISTS.value

    operator: str
    query: Statement

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", _normalize_operator(self.operator))


@dataclass(frozen=True)
class Conjunction(Expression):
    """Children joined by ``AND`` or ``OR``, in the given order."""

    kind: ClassVar[str] = ExpressionKind.CONJUNCTION.value

    operator: str
    expressions: Tuple[Expression, ...]

    def __post_init__(self) -> None:
        operator = _normalize_operator(self.operator)
        if operator not in ("AND", "OR"):
            raise InvalidConditionError(
                f"Conjunction operator must be AND or OR, got {self.operator!r}"
            )
        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "expressions", tuple(self.expressions))


@dataclass(frozen=True)
class Negation(Expression):
    """``NOT (<condition>)``."""

    kind: ClassVar[str] = ExpressionKind.NOT.value

    condition: Expression


@dataclass(frozen=True)
class HashCondition(Expression):
    """
    Column -> value equality conditions joined by AND.

    ``None`` means ``IS NULL``; sequences and sub-queries mean ``IN``.
    """

    kind: ClassVar[str] = ExpressionKind.HASH.value

    columns: Mapping[str, Any]

    def __post_init__(self) -> None:
        if not self.columns:
            raise InvalidConditionError("HashCondition needs at least one column")
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))


def and_(*expressions: Expression) -> Conjunction:
    """Combine expressions with AND."""
    return Conjunction("AND", expressions)


def or_(*expressions: Expression) -> Conjunction:
    """Combine expressions with OR."""
    return Conjunction("OR", expressions)


def not_(expression: Expression) -> Negation:
    """Negate an expression."""
    return Negation(expression)
