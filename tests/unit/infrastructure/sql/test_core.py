"""
Unit tests for SQL core utilities: identifier quoting and parameter binding.
"""

import pytest

from portable_sql.exceptions import InvalidConditionError
from portable_sql.infrastructure.sql.core.identifier import (
    is_quoted,
    quote_column_name,
    quote_identifier,
    quote_string,
)
from portable_sql.infrastructure.sql.core.parameters import ParameterBinder


class TestQuoteIdentifier:
    """Tests for quote_identifier function."""

    def test_quote_ascii_column(self):
        """ASCII column names should be double-quoted."""
        assert quote_identifier("company_id") == '"company_id"'

    def test_quote_non_ascii_column(self):
        """Non-ASCII names are quoted the same way."""
        assert quote_identifier("年金计划号") == '"年金计划号"'

    def test_quote_with_internal_quotes(self):
        """Internal double quotes should be escaped."""
        assert quote_identifier('column"name') == '"column""name"'

    def test_quote_mysql_dialect(self):
        """MySQL dialect should use backticks."""
        assert quote_identifier("order", dialect="mysql") == "`order`"

    def test_quote_mysql_with_internal_backtick(self):
        """MySQL internal backticks should be escaped."""
        assert quote_identifier("column`name", dialect="mysql") == "`column``name`"

    def test_unknown_dialect_uses_double_quotes(self):
        assert quote_identifier("x", dialect="sqlite") == '"x"'


class TestQuoteColumnName:
    """Tests for table-prefixed column quoting."""

    def test_plain_column(self):
        assert quote_column_name("email") == '"email"'

    def test_table_prefix(self):
        """Each dot-separated part is quoted on its own."""
        assert quote_column_name("users.email") == '"users"."email"'

    def test_star_is_not_quoted(self):
        assert quote_column_name("u.*") == '"u".*'

    def test_already_quoted_part_is_kept(self):
        assert quote_column_name('"users".email') == '"users"."email"'

    def test_mysql_prefix(self):
        assert quote_column_name("t.c", dialect="mysql") == "`t`.`c`"

    def test_is_quoted(self):
        assert is_quoted('"a"')
        assert not is_quoted("a")
        assert is_quoted("`a`", dialect="mysql")
        assert not is_quoted('"', dialect="generic")


class TestQuoteString:
    def test_plain(self):
        assert quote_string("abc") == "'abc'"

    def test_embedded_quote_is_doubled(self):
        assert quote_string("it's") == "'it''s'"


class TestParameterBinder:
    """Tests for ParameterBinder."""

    def test_bind_allocates_sequential_names(self):
        """Placeholders are :p0, :p1, ... in bind order."""
        binder = ParameterBinder(prefix="p")

        assert binder.bind(5) == ":p0"
        assert binder.bind("x") == ":p1"
        assert binder.params == {"p0": 5, "p1": "x"}

    def test_params_is_a_copy(self):
        binder = ParameterBinder(prefix="p")
        binder.bind(1)

        snapshot = binder.params
        snapshot["p9"] = "tampered"

        assert "p9" not in binder.params

    def test_merge_strips_leading_colon(self):
        binder = ParameterBinder(prefix="p")
        binder.merge({":start": 1, "end": 2})

        assert binder.params == {"start": 1, "end": 2}

    def test_bind_skips_names_taken_by_merge(self):
        """A merged name is never overwritten by a generated one."""
        binder = ParameterBinder({"p1": "raw"}, prefix="p")

        placeholder = binder.bind("bound")

        assert placeholder != ":p1"
        assert binder.params["p1"] == "raw"
        assert binder.params[placeholder[1:]] == "bound"

    def test_merge_rejects_name_bound_to_other_value(self):
        """A merged name cannot replace a literal bound earlier."""
        binder = ParameterBinder(prefix="p")
        binder.bind(1)

        with pytest.raises(InvalidConditionError, match="p0"):
            binder.merge({"p0": 2, "p5": 3})

        assert binder.params == {"p0": 1}

    def test_merge_accepts_same_value_again(self):
        """Merging the same raw params twice is harmless."""
        binder = ParameterBinder({":start": 1}, prefix="p")
        binder.merge({"start": 1})

        assert binder.params == {"start": 1}

    def test_bind_none(self):
        """None is a legitimate bound value."""
        binder = ParameterBinder(prefix="p")
        assert binder.bind(None) == ":p0"
        assert binder.params == {"p0": None}

    def test_custom_prefix(self):
        binder = ParameterBinder(prefix="qb")
        assert binder.bind(1) == ":qb0"

    def test_prefix_defaults_to_settings(self, configure):
        """The prefix comes from PORTABLE_SQL_PARAM_PREFIX when not given."""
        configure(param_prefix="arg")

        assert ParameterBinder().bind(1) == ":arg0"

    def test_container_protocol(self):
        binder = ParameterBinder(prefix="p")
        binder.bind("a")
        binder.bind("b")

        assert len(binder) == 2
        assert list(binder) == ["p0", "p1"]
        assert binder.names() == ["p0", "p1"]
        assert "p0" in binder
        assert ":p1" in binder
        assert "p2" not in binder
        assert 0 not in binder

    @pytest.mark.parametrize("value", [0, "", [], {"k": "v"}])
    def test_values_are_stored_unchanged(self, value):
        binder = ParameterBinder(prefix="p")
        binder.bind(value)
        assert binder.params["p0"] == value
