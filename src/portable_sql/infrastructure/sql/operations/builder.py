"""
Query builder: the orchestration point for SQL generation.

QueryBuilder renders expressions through the expression builder registry,
assembles SELECT/INSERT/UPDATE/DELETE statements and table DDL, and owns the
identifier-quoting policy of its dialect. Every method that renders literals
returns ``(sql, params)`` where ``params`` maps placeholder names to values.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from portable_sql.config import get_settings
from portable_sql.infrastructure.schema.ddl_generator import (
    generate_add_column_ddl,
    generate_create_index_ddl,
    generate_create_table_ddl,
    generate_drop_table_ddl,
)
from portable_sql.utils.logging import get_logger

from ..core.parameters import ParameterBinder
from ..dialects import Dialect, get_dialect
from ..expressions.conditions import ExpressionBuilder
from ..expressions.model import Expression, Statement
from ..expressions.registry import ExpressionBuilderRegistry
from .query import Condition, Query, Source, to_expression

logger = get_logger(__name__)

BuildResult = Tuple[str, Dict[str, Any]]


class QueryBuilder:
    """
    Dialect-aware builder for expressions and statements.

    Example:
        >>> builder = QueryBuilder("postgresql")
        >>> builder.render(BetweenColumns(5, "BETWEEN", "a", "b"))
        (':p0 BETWEEN "a" AND "b"', {'p0': 5})
    """

    def __init__(
        self,
        dialect: Union[Dialect, str, None] = None,
        builders: Optional[Mapping[str, Type[ExpressionBuilder]]] = None,
        param_prefix: Optional[str] = None,
    ):
        """
        Initialize the QueryBuilder.

        Args:
            dialect: Dialect instance or registered name; defaults to the configured one
            builders: Complete kind -> builder class mapping for the registry
            param_prefix: Placeholder prefix; defaults to the configured one
        """
        settings = get_settings()
        if dialect is None:
            dialect = settings.dialect
        self.dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect
        self.param_prefix = param_prefix or settings.param_prefix
        self.registry = ExpressionBuilderRegistry(self, builders)

    @classmethod
    def from_settings(cls) -> QueryBuilder:
        """Create a builder using the configured dialect and placeholder prefix."""
        return cls()

    # ------------------------------------------------------------------
    # Shared context for condition builders
    # ------------------------------------------------------------------

    def new_binder(self, params: Optional[Mapping[str, Any]] = None) -> ParameterBinder:
        """Create a fresh binder for one statement build."""
        return ParameterBinder(params, prefix=self.param_prefix)

    def quote_column_name(self, name: str) -> str:
        return self.dialect.quote_column(name)

    def quote_table_name(self, name: str) -> str:
        return self.dialect.quote_table(name)

    def bind_param(self, value: Any, params: ParameterBinder) -> str:
        """Bind a literal and return its placeholder."""
        return params.bind(value)

    def build_expression(self, expression: Expression, params: ParameterBinder) -> str:
        """Render an expression with its registered condition builder."""
        return self.registry.build(expression, params)

    def build_condition(
        self, condition: Optional[Condition], params: ParameterBinder
    ) -> str:
        """Render an expression, a hash mapping or raw SQL; ``None`` is empty."""
        if condition is None:
            return ""
        return self.build_expression(to_expression(condition), params)

    def render(self, condition: Condition) -> BuildResult:
        """Render a standalone condition with a fresh binder."""
        binder = self.new_binder()
        sql = self.build_condition(condition, binder)
        return sql, binder.params

    # ------------------------------------------------------------------
    # SELECT
    # ------------------------------------------------------------------

    def build(self, query: Statement, params: Optional[ParameterBinder] = None) -> BuildResult:
        """
        Render a Query into a SELECT statement.

        Nested sub-queries pass the outer binder so all placeholders of one
        statement come from a single sequence.

        Args:
            query: Query to render
            params: Binder of the enclosing build, or None to start a new one

        Returns:
            Tuple of (SQL text, parameters)
        """
        binder = params if params is not None else self.new_binder()
        if not isinstance(query, Query):
            raise TypeError(f"Cannot build statement of type {type(query).__name__}")

        clauses = [
            self._build_select(query, binder),
            self._build_from(query, binder),
            self._build_joins(query, binder),
            self._build_where(query.where_condition, binder),
            self._build_group_by(query, binder),
            self._build_having(query, binder),
            self._build_order_by(query, binder),
            self.dialect.build_limit(query.limit_value, query.offset_value),
        ]
        sql = " ".join(clause for clause in clauses if clause)

        if params is None:
            logger.debug("statement_built", statement="select", param_names=binder.names())
        return sql, binder.params

    def _build_source(self, source: Source, binder: ParameterBinder) -> str:
        if isinstance(source, Statement):
            sql, _ = self.build(source, binder)
            return f"({sql})"
        if isinstance(source, Expression):
            return self.build_expression(source, binder)
        if "(" in source:
            return source
        return self._quote_with_alias(source)

    def _quote_with_alias(self, name: str) -> str:
        """Quote ``name``, ``name alias`` or ``name AS alias``."""
        parts = name.split()
        if len(parts) == 3 and parts[1].upper() == "AS":
            return f"{self.quote_column_name(parts[0])} AS {self.quote_column_name(parts[2])}"
        if len(parts) == 2:
            return f"{self.quote_column_name(parts[0])} {self.quote_column_name(parts[1])}"
        return self.quote_column_name(name)

    def _build_select(self, query: Query, binder: ParameterBinder) -> str:
        select = "SELECT DISTINCT" if query.is_distinct else "SELECT"
        columns = [self._build_source(c, binder) for c in query.columns]
        for alias, column in query.aliased_columns.items():
            columns.append(
                f"{self._build_source(column, binder)} AS {self.quote_column_name(alias)}"
            )
        return f"{select} {', '.join(columns) if columns else '*'}"

    def _build_from(self, query: Query, binder: ParameterBinder) -> str:
        tables = [self._build_source(t, binder) for t in query.tables]
        for alias, table in query.aliased_tables.items():
            tables.append(f"{self._build_source(table, binder)} {self.quote_table_name(alias)}")
        if not tables:
            return ""
        return f"FROM {', '.join(tables)}"

    def _build_joins(self, query: Query, binder: ParameterBinder) -> str:
        joins: List[str] = []
        for join_type, table, condition in query.joins:
            sql = f"{join_type} {self._build_source(table, binder)}"
            on = self.build_condition(condition, binder)
            if on:
                sql = f"{sql} ON {on}"
            joins.append(sql)
        return " ".join(joins)

    def _build_where(self, condition: Optional[Expression], binder: ParameterBinder) -> str:
        where = self.build_condition(condition, binder)
        return f"WHERE {where}" if where else ""

    def _build_group_by(self, query: Query, binder: ParameterBinder) -> str:
        if not query.group_by_columns:
            return ""
        columns = [self._build_source(c, binder) for c in query.group_by_columns]
        return f"GROUP BY {', '.join(columns)}"

    def _build_having(self, query: Query, binder: ParameterBinder) -> str:
        having = self.build_condition(query.having_condition, binder)
        return f"HAVING {having}" if having else ""

    def _build_order_by(self, query: Query, binder: ParameterBinder) -> str:
        if not query.order_by_columns:
            return ""
        columns = [
            f"{self._build_source(column, binder)}{' DESC' if descending else ''}"
            for column, descending in query.order_by_columns
        ]
        return f"ORDER BY {', '.join(columns)}"

    # ------------------------------------------------------------------
    # INSERT / UPDATE / DELETE
    # ------------------------------------------------------------------

    def _value_placeholder(self, value: Any, binder: ParameterBinder) -> str:
        if isinstance(value, Expression):
            return self.build_expression(value, binder)
        if isinstance(value, Statement):
            sql, _ = self.build(value, binder)
            return f"({sql})"
        return self.bind_param(value, binder)

    def _build_insert(self, table: str, values: Mapping[str, Any], binder: ParameterBinder) -> str:
        quoted_table = self.quote_table_name(table)
        if not values:
            return self.dialect.build_empty_insert(quoted_table)
        columns = ", ".join(self.quote_column_name(c) for c in values)
        placeholders = ", ".join(self._value_placeholder(v, binder) for v in values.values())
        return f"INSERT INTO {quoted_table} ({columns}) VALUES ({placeholders})"

    def insert(self, table: str, values: Mapping[str, Any]) -> BuildResult:
        """
        Build an INSERT statement.

        Example:
            >>> QueryBuilder().insert("users", {"name": "alice", "age": 30})
            ('INSERT INTO "users" ("name", "age") VALUES (:p0, :p1)', {'p0': 'alice', 'p1': 30})
        """
        binder = self.new_binder()
        sql = self._build_insert(table, values, binder)
        logger.debug("statement_built", statement="insert", table=table, param_names=binder.names())
        return sql, binder.params

    def upsert(
        self,
        table: str,
        values: Mapping[str, Any],
        conflict_columns: Sequence[str],
        update_columns: Union[bool, Sequence[str]] = True,
        null_guard: bool = False,
    ) -> BuildResult:
        """
        Build an INSERT that updates or skips rows conflicting on ``conflict_columns``.

        Args:
            table: Table name
            values: Column -> value mapping to insert
            conflict_columns: Columns for conflict detection
            update_columns: True updates all non-conflict columns, False does nothing
                on conflict, a sequence updates exactly those columns
            null_guard: If True, only overwrite existing NULL values

        Returns:
            Tuple of (SQL text, parameters)
        """
        binder = self.new_binder()
        insert_sql = self._build_insert(table, values, binder)
        if update_columns is True:
            columns = [c for c in values if c not in conflict_columns]
        elif update_columns is False:
            columns = []
        else:
            columns = list(update_columns)
        sql = self.dialect.build_upsert(insert_sql, table, conflict_columns, columns, null_guard)
        logger.debug("statement_built", statement="upsert", table=table, param_names=binder.names())
        return sql, binder.params

    def update(
        self, table: str, values: Mapping[str, Any], condition: Optional[Condition] = None
    ) -> BuildResult:
        """Build an UPDATE statement; SET placeholders precede WHERE placeholders."""
        binder = self.new_binder()
        assignments = ", ".join(
            f"{self.quote_column_name(column)} = {self._value_placeholder(value, binder)}"
            for column, value in values.items()
        )
        sql = f"UPDATE {self.quote_table_name(table)} SET {assignments}"
        where = self._build_where(to_expression(condition) if condition is not None else None, binder)
        if where:
            sql = f"{sql} {where}"
        logger.debug("statement_built", statement="update", table=table, param_names=binder.names())
        return sql, binder.params

    def delete(self, table: str, condition: Optional[Condition] = None) -> BuildResult:
        """Build a DELETE statement."""
        binder = self.new_binder()
        sql = f"DELETE FROM {self.quote_table_name(table)}"
        where = self._build_where(to_expression(condition) if condition is not None else None, binder)
        if where:
            sql = f"{sql} {where}"
        logger.debug("statement_built", statement="delete", table=table, param_names=binder.names())
        return sql, binder.params

    # ------------------------------------------------------------------
    # DDL
    # ------------------------------------------------------------------

    def get_column_type(self, column_type: Any) -> str:
        """Map an abstract column type (or ColumnSchemaBuilder) to a physical type."""
        return self.dialect.get_column_type(str(column_type))

    def create_table(
        self, table: str, columns: Mapping[Union[str, int], Any], options: Optional[str] = None
    ) -> str:
        return generate_create_table_ddl(table, columns, self.dialect, options)

    def drop_table(self, table: str, if_exists: bool = False, cascade: bool = False) -> str:
        return generate_drop_table_ddl(table, self.dialect, if_exists, cascade)

    def add_column(self, table: str, column: str, column_type: Any) -> str:
        return generate_add_column_ddl(table, column, column_type, self.dialect)

    def create_index(
        self, name: str, table: str, columns: Sequence[str], unique: bool = False
    ) -> str:
        return generate_create_index_ddl(name, table, columns, self.dialect, unique)

    # ------------------------------------------------------------------
    # Execution handoff
    # ------------------------------------------------------------------

    @staticmethod
    def to_text_clause(sql: str, params: Mapping[str, Any]) -> TextClause:
        """Wrap a build result in a SQLAlchemy TextClause with bound parameters."""
        clause = text(sql)
        if params:
            clause = clause.bindparams(**params)
        return clause
