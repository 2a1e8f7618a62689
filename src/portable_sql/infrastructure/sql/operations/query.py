"""
Query object for SELECT statements and sub-queries.

A Query only collects the parts of a SELECT; ``QueryBuilder.build()`` turns
it into SQL. Mutators return the same instance so calls can be chained.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..expressions.model import (
    Conjunction,
    Expression,
    HashCondition,
    RawExpression,
    Statement,
)

Condition = Union[Expression, Mapping[str, Any], str]
Source = Union[str, Statement, Expression]


def to_expression(condition: Condition) -> Expression:
    """Normalize a condition: mappings become hash conditions, strings raw SQL."""
    if isinstance(condition, Expression):
        return condition
    if isinstance(condition, Mapping):
        return HashCondition(condition)
    return RawExpression(condition)


class Query(Statement):
    """
    Fluent description of a SELECT statement.

    Example:
        >>> query = (
        ...     Query()
        ...     .select("id", "name")
        ...     .from_("users")
        ...     .where({"status": "active"})
        ...     .order_by("name")
        ...     .limit(10)
        ... )
    """

    def __init__(self) -> None:
        self.columns: List[Source] = []
        self.aliased_columns: Dict[str, Source] = {}
        self.is_distinct = False
        self.tables: List[Source] = []
        self.aliased_tables: Dict[str, Source] = {}
        self.joins: List[Tuple[str, Source, Optional[Expression]]] = []
        self.where_condition: Optional[Expression] = None
        self.group_by_columns: List[Source] = []
        self.having_condition: Optional[Expression] = None
        self.order_by_columns: List[Tuple[Source, bool]] = []
        self.limit_value: Optional[int] = None
        self.offset_value: Optional[int] = None

    def select(self, *columns: Source, **aliased: Source) -> Query:
        """Add selected columns; keyword arguments select ``<value> AS <alias>``."""
        self.columns.extend(columns)
        self.aliased_columns.update(aliased)
        return self

    def distinct(self, value: bool = True) -> Query:
        self.is_distinct = value
        return self

    def from_(self, *tables: Source, **aliased: Source) -> Query:
        """Add tables; keyword arguments give aliases (required for sub-queries)."""
        self.tables.extend(tables)
        self.aliased_tables.update(aliased)
        return self

    def join(
        self, join_type: str, table: Source, on: Optional[Condition] = None
    ) -> Query:
        """Add a join; a string ``on`` is emitted as raw SQL."""
        condition = to_expression(on) if on is not None else None
        self.joins.append((join_type.upper(), table, condition))
        return self

    def inner_join(self, table: Source, on: Optional[Condition] = None) -> Query:
        return self.join("INNER JOIN", table, on)

    def left_join(self, table: Source, on: Optional[Condition] = None) -> Query:
        return self.join("LEFT JOIN", table, on)

    def where(self, condition: Optional[Condition]) -> Query:
        """Replace the WHERE condition."""
        self.where_condition = to_expression(condition) if condition is not None else None
        return self

    def and_where(self, condition: Condition) -> Query:
        self.where_condition = self._combine("AND", self.where_condition, condition)
        return self

    def or_where(self, condition: Condition) -> Query:
        self.where_condition = self._combine("OR", self.where_condition, condition)
        return self

    def group_by(self, *columns: Source) -> Query:
        self.group_by_columns.extend(columns)
        return self

    def having(self, condition: Optional[Condition]) -> Query:
        self.having_condition = to_expression(condition) if condition is not None else None
        return self

    def order_by(self, column: Source, descending: bool = False) -> Query:
        self.order_by_columns.append((column, descending))
        return self

    def limit(self, value: Optional[int]) -> Query:
        self.limit_value = value
        return self

    def offset(self, value: Optional[int]) -> Query:
        self.offset_value = value
        return self

    @staticmethod
    def _combine(
        operator: str, current: Optional[Expression], condition: Condition
    ) -> Expression:
        expression = to_expression(condition)
        if current is None:
            return expression
        return Conjunction(operator, (current, expression))

    def __repr__(self) -> str:
        return (
            f"Query(columns={self.columns!r}, tables={self.tables!r}, "
            f"where={self.where_condition!r})"
        )
