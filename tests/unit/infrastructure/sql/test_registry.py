"""
Unit tests for the expression builder registry.
"""

from dataclasses import dataclass
from typing import ClassVar

import pytest

from portable_sql.exceptions import ExpressionRegistryError, UnregisteredExpressionError
from portable_sql.infrastructure.sql.expressions import (
    DEFAULT_BUILDERS,
    BetweenColumns,
    BetweenColumnsBuilder,
    Comparison,
    Expression,
    ExpressionBuilder,
    ExpressionKind,
)
from portable_sql.infrastructure.sql.operations import QueryBuilder


@dataclass(frozen=True)
class Greatest(Expression):
    """GREATEST(<columns>) used as a column operand."""

    kind: ClassVar[str] = "greatest"

    columns: tuple


class GreatestBuilder(ExpressionBuilder):
    def build(self, expression, params):
        columns = ", ".join(self.resolve_column(c, params) for c in expression.columns)
        return f"GREATEST({columns})"


class ReversedBetweenColumnsBuilder(BetweenColumnsBuilder):
    """Renders the interval as two comparisons instead of BETWEEN."""

    def build(self, expression, params):
        value = self.create_placeholder(expression.value, params)
        start = self.resolve_column(expression.interval_start_column, params)
        end = self.resolve_column(expression.interval_end_column, params)
        return f"{start} <= {value} AND {value} <= {end}"


class TestExpressionBuilderRegistry:
    """Tests for ExpressionBuilderRegistry."""

    def test_default_registry_covers_builtin_kinds(self):
        registry = QueryBuilder("generic").registry
        assert registry.kinds() == sorted(kind.value for kind in ExpressionKind)

    def test_incomplete_mapping_fails_at_construction(self):
        """A missing built-in builder is a configuration error, not a render error."""
        builders = {
            kind: builder
            for kind, builder in DEFAULT_BUILDERS.items()
            if kind != ExpressionKind.BETWEEN_COLUMNS.value
        }

        with pytest.raises(ExpressionRegistryError) as exc_info:
            QueryBuilder("generic", builders=builders)

        assert exc_info.value.missing == ["between_columns"]

    def test_unregistered_kind(self):
        builder = QueryBuilder("generic")

        with pytest.raises(UnregisteredExpressionError) as exc_info:
            builder.render(Greatest(("a", "b")))

        assert exc_info.value.kind == "greatest"
        assert "between_columns" in exc_info.value.available

    def test_unregistered_kind_is_lookup_error(self):
        with pytest.raises(LookupError):
            QueryBuilder("generic").render(Greatest(("a",)))

    def test_object_without_kind(self):
        registry = QueryBuilder("generic").registry
        with pytest.raises(UnregisteredExpressionError):
            registry.get_builder(object())

    def test_register_custom_kind(self):
        builder = QueryBuilder("generic")
        builder.registry.register("greatest", GreatestBuilder)

        sql, params = builder.render(
            BetweenColumns(5, "BETWEEN", "a", Greatest(("b", "c")))
        )

        assert sql == ':p0 BETWEEN "a" AND GREATEST("b", "c")'
        assert params == {"p0": 5}

    def test_override_builtin_builder(self):
        """A builder mapping may replace the renderer of a built-in variant."""
        builders = dict(DEFAULT_BUILDERS)
        builders[ExpressionKind.BETWEEN_COLUMNS] = ReversedBetweenColumnsBuilder
        builder = QueryBuilder("generic", builders=builders)

        sql, params = builder.render(BetweenColumns(5, "BETWEEN", "a", "b"))

        assert sql == '"a" <= :p0 AND :p0 <= "b"'
        assert params == {"p0": 5}

    def test_register_replaces_cached_builder(self):
        builder = QueryBuilder("generic")
        condition = BetweenColumns(5, "BETWEEN", "a", "b")
        builder.render(condition)

        builder.registry.register(ExpressionKind.BETWEEN_COLUMNS, ReversedBetweenColumnsBuilder)

        assert builder.render(condition)[0] == '"a" <= :p0 AND :p0 <= "b"'

    def test_builders_are_reused(self):
        registry = QueryBuilder("generic").registry
        expression = Comparison("a", "=", 1)

        assert registry.get_builder(expression) is registry.get_builder(expression)
        assert isinstance(registry.get_builder(expression), ExpressionBuilder)

    def test_registries_are_independent(self):
        first = QueryBuilder("generic")
        second = QueryBuilder("generic")

        first.registry.register("greatest", GreatestBuilder)

        assert "greatest" in first.registry.kinds()
        assert "greatest" not in second.registry.kinds()

    def test_base_builder_is_abstract(self):
        with pytest.raises(NotImplementedError):
            ExpressionBuilder(QueryBuilder("generic")).build(None, None)
