"""
Condition builders, one per expression variant.

Each builder renders its variant to SQL text, binding every literal through
the shared ParameterBinder and calling back into the QueryBuilder for nested
expressions, sub-queries and identifier quoting. Operands are resolved in the
order they appear in the emitted text so that placeholders are allocated in
text order.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, List, Mapping

from portable_sql.exceptions import InvalidConditionError

from ..core.parameters import ParameterBinder
from .model import (
    BetweenColumns,
    BetweenValue,
    ColumnOperand,
    Comparison,
    Conjunction,
    Exists,
    Expression,
    HashCondition,
    InList,
    Like,
    Negation,
    RawExpression,
    Statement,
)

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from ..operations.builder import QueryBuilder

_LIKE_OPERATOR = re.compile(r"^(AND |OR )?((NOT )?I?LIKE)$")
_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class ExpressionBuilder:
    """Base class for condition builders."""

    def __init__(self, query_builder: QueryBuilder):
        self.query_builder = query_builder

    def build(self, expression: Any, params: ParameterBinder) -> str:
        """Render ``expression`` and bind its literals into ``params``."""
        raise NotImplementedError

    def resolve_column(self, column: ColumnOperand, params: ParameterBinder) -> str:
        """
        Prepare a column operand for use in SQL.

        Sub-queries are rendered in parentheses, expressions are rendered by
        the query builder, plain names are quoted. A string containing ``(``
        is treated as a raw fragment (e.g. ``DATE(col)``) and passed through
        unchanged; wrap untrusted input in an expression instead.
        """
        if isinstance(column, Statement):
            sql, _ = self.query_builder.build(column, params)
            return f"({sql})"
        if isinstance(column, Expression):
            return self.query_builder.build_expression(column, params)
        if not isinstance(column, str):
            raise InvalidConditionError(
                "Column operand must be a name, expression or sub-query, "
                f"got {type(column).__name__}"
            )
        if "(" not in column:
            return self.query_builder.quote_column_name(column)
        return column

    def create_placeholder(self, value: Any, params: ParameterBinder) -> str:
        """Render an expression value or bind a literal and return its placeholder."""
        if isinstance(value, Expression):
            return self.query_builder.build_expression(value, params)
        if isinstance(value, Statement):
            sql, _ = self.query_builder.build(value, params)
            return f"({sql})"
        return self.query_builder.bind_param(value, params)


class RawExpressionBuilder(ExpressionBuilder):
    def build(self, expression: RawExpression, params: ParameterBinder) -> str:
        params.merge(expression.params)
        return expression.sql


class ComparisonBuilder(ExpressionBuilder):
    """Builds ``<column> <operator> <value>``."""

    def build(self, expression: Comparison, params: ParameterBinder) -> str:
        column = self.resolve_column(expression.column, params)
        operator = expression.operator
        if expression.value is None:
            return f"{column} {operator} NULL"
        value = self.create_placeholder(expression.value, params)
        return f"{column} {operator} {value}"


class BetweenValueBuilder(ExpressionBuilder):
    """Builds ``<column> BETWEEN <start> AND <end>``."""

    def build(self, expression: BetweenValue, params: ParameterBinder) -> str:
        column = self.resolve_column(expression.column, params)
        start = self.create_placeholder(expression.interval_start, params)
        end = self.create_placeholder(expression.interval_end, params)
        return f"{column} {expression.operator} {start} AND {end}"


class BetweenColumnsBuilder(ExpressionBuilder):
    """Builds ``<value> BETWEEN <start_column> AND <end_column>``."""

    def build(self, expression: BetweenColumns, params: ParameterBinder) -> str:
        value = self.create_placeholder(expression.value, params)
        start_column = self.resolve_column(expression.interval_start_column, params)
        end_column = self.resolve_column(expression.interval_end_column, params)
        return f"{value} {expression.operator} {start_column} AND {end_column}"


class InListBuilder(ExpressionBuilder):
    """
    Builds ``IN`` / ``NOT IN`` conditions.

    An empty value list renders ``0=1`` for IN (never true) and an empty
    condition for NOT IN (always true). A single value collapses to ``=`` or
    ``<>``; ``None`` values become ``IS NULL`` checks.
    """

    def build(self, expression: InList, params: ParameterBinder) -> str:
        operator = expression.operator
        column = expression.column
        values = expression.values

        if isinstance(column, tuple) and len(column) == 1:
            column = column[0]
            if isinstance(values, tuple):
                values = tuple(self._unwrap_row(row, column) for row in values)

        if isinstance(values, Statement):
            return self._build_subquery(operator, column, values, params)

        if isinstance(values, tuple) and not values:
            return self._build_empty(operator)

        if isinstance(column, tuple):
            return self._build_composite(operator, column, values, params)

        quoted = self.resolve_column(column, params)
        if isinstance(values, Expression):
            sql = self.query_builder.build_expression(values, params)
            return f"{quoted} {operator} ({sql})"

        if not isinstance(values, tuple):
            values = (values,)

        placeholders: List[str] = []
        has_null = False
        for value in values:
            if value is None:
                has_null = True
                continue
            placeholders.append(self.create_placeholder(value, params))

        negated = operator == "NOT IN"
        if not placeholders:
            return f"{quoted} IS NOT NULL" if negated else f"{quoted} IS NULL"

        if len(placeholders) == 1:
            single_operator = "<>" if negated else "="
            sql = f"{quoted} {single_operator} {placeholders[0]}"
        else:
            sql = f"{quoted} {operator} ({', '.join(placeholders)})"

        if has_null:
            if negated:
                return f"{sql} AND {quoted} IS NOT NULL"
            return f"({sql} OR {quoted} IS NULL)"
        return sql

    @staticmethod
    def _unwrap_row(row: Any, column: Any) -> Any:
        """Reduce a one-column row (tuple or mapping) to its single value."""
        if isinstance(row, Mapping):
            return row.get(column)
        if isinstance(row, (list, tuple)) and row:
            return row[0]
        return row

    @staticmethod
    def _build_empty(operator: str) -> str:
        return "" if operator == "NOT IN" else "0=1"

    def _build_subquery(
        self, operator: str, column: Any, query: Statement, params: ParameterBinder
    ) -> str:
        if isinstance(column, tuple):
            quoted = ", ".join(self.resolve_column(c, params) for c in column)
            left = f"({quoted})"
        else:
            left = self.resolve_column(column, params)
        sql, _ = self.query_builder.build(query, params)
        return f"{left} {operator} ({sql})"

    def _build_composite(
        self, operator: str, columns: tuple, values: Any, params: ParameterBinder
    ) -> str:
        quoted = ", ".join(self.resolve_column(c, params) for c in columns)
        rows: List[str] = []
        for row in values:
            if isinstance(row, Mapping):
                items = [row.get(c) for c in columns]
            else:
                items = list(row)
            placeholders = [
                "NULL" if item is None else self.create_placeholder(item, params)
                for item in items
            ]
            rows.append(f"({', '.join(placeholders)})")
        if not rows:
            return self._build_empty(operator)
        return f"({quoted}) {operator} ({', '.join(rows)})"


class LikeBuilder(ExpressionBuilder):
    """
    Builds ``LIKE`` conditions for one or more values.

    ``OR LIKE`` / ``OR NOT LIKE`` join several values with OR; the plain
    operators join them with AND.
    """

    def build(self, expression: Like, params: ParameterBinder) -> str:
        match = _LIKE_OPERATOR.match(expression.operator)
        if not match:
            raise InvalidConditionError(
                f"Invalid LIKE operator: {expression.operator!r}"
            )
        joiner = " OR " if match.group(1) == "OR " else " AND "
        operator = match.group(2)
        negated = match.group(3) is not None

        values = expression.value
        if not isinstance(values, tuple):
            values = (values,)
        if not values:
            return "" if negated else "0=1"

        replacements = expression.escaping_replacements
        escape_sql = ""
        if replacements is not None:
            escape_sql = self.query_builder.dialect.build_like_escape()

        column = self.resolve_column(expression.column, params)
        parts: List[str] = []
        for value in values:
            if isinstance(value, Expression):
                placeholder = self.query_builder.build_expression(value, params)
            else:
                if replacements is not None and isinstance(value, str):
                    value = f"%{self._escape(value, replacements)}%"
                placeholder = self.query_builder.bind_param(value, params)
            parts.append(f"{column} {operator} {placeholder}{escape_sql}")
        return joiner.join(parts)

    @staticmethod
    def _escape(value: str, replacements: Mapping[str, str]) -> str:
        if not replacements:
            return value
        # Single pass so replacement text is never escaped again
        pattern = "|".join(
            re.escape(key) for key in sorted(replacements, key=len, reverse=True)
        )
        return re.sub(pattern, lambda m: replacements[m.group(0)], value)


class ExistsBuilder(ExpressionBuilder):
    def build(self, expression: Exists, params: ParameterBinder) -> str:
        sql, _ = self.query_builder.build(expression.query, params)
        return f"{expression.operator} ({sql})"


class ConjunctionBuilder(ExpressionBuilder):
    """Joins child conditions, skipping those that render empty."""

    def build(self, expression: Conjunction, params: ParameterBinder) -> str:
        parts: List[str] = []
        for child in expression.expressions:
            sql = self.query_builder.build_condition(child, params)
            if sql:
                parts.append(sql)

        if not parts:
            return ""
        if len(parts) == 1:
            return parts[0]
        return "(" + f") {expression.operator} (".join(parts) + ")"


class NegationBuilder(ExpressionBuilder):
    def build(self, expression: Negation, params: ParameterBinder) -> str:
        sql = self.query_builder.build_condition(expression.condition, params)
        if not sql:
            return ""
        return f"NOT ({sql})"


class HashConditionBuilder(ExpressionBuilder):
    """Builds ``col = value`` pairs joined by AND."""

    def build(self, expression: HashCondition, params: ParameterBinder) -> str:
        parts: List[str] = []
        for column, value in expression.columns.items():
            if isinstance(value, _SEQUENCE_TYPES) or isinstance(value, Statement):
                in_condition = InList(column, "IN", value)
                parts.append(self.query_builder.build_expression(in_condition, params))
                continue

            quoted = self.resolve_column(column, params)
            if value is None:
                parts.append(f"{quoted} IS NULL")
            else:
                parts.append(f"{quoted} = {self.create_placeholder(value, params)}")

        if len(parts) == 1:
            return parts[0]
        return "(" + ") AND (".join(parts) + ")"
