"""
Unit tests for ColumnSchemaBuilder.
"""

import locale

import pytest

from portable_sql.infrastructure.schema.column_builder import ColumnSchemaBuilder
from portable_sql.infrastructure.schema.core import ColumnType, TypeCategory
from portable_sql.infrastructure.sql.expressions import RawExpression
from portable_sql.infrastructure.sql.operations import QueryBuilder


def column(column_type, length=None, dialect="generic", **kwargs):
    return ColumnSchemaBuilder(column_type, length, dialect=dialect, **kwargs)


_COMMA_DECIMAL_LOCALES = ("de_DE.UTF-8", "de_DE.utf8", "fr_FR.UTF-8", "ru_RU.UTF-8", "nl_NL.UTF-8")


@pytest.fixture
def comma_decimal_locale():
    """Switch LC_NUMERIC to a locale that writes 3,0; skip when none is installed."""
    original = locale.setlocale(locale.LC_NUMERIC)
    for name in _COMMA_DECIMAL_LOCALES:
        try:
            locale.setlocale(locale.LC_NUMERIC, name)
        except locale.Error:
            continue
        if locale.localeconv()["decimal_point"] == ",":
            break
    else:
        locale.setlocale(locale.LC_NUMERIC, original)
        pytest.skip("no comma-decimal locale available")
    try:
        yield
    finally:
        locale.setlocale(locale.LC_NUMERIC, original)


class TestBasicRendering:
    """Tests for type, length and constraint fragments."""

    def test_type_only(self):
        assert str(column("string")) == "string"

    def test_length(self):
        assert str(column("string", 255).not_null()) == "string(255) NOT NULL"

    def test_precision_and_scale(self):
        assert str(column("decimal", [10, 2])) == "decimal(10,2)"

    @pytest.mark.parametrize("length", [None, [], ()])
    def test_empty_length(self, length):
        assert str(column("decimal", length)) == "decimal"

    def test_string_length(self):
        assert str(column("string", "max")) == "string(max)"

    def test_column_type_enum(self):
        assert str(column(ColumnType.STRING, 32)) == "string(32)"

    def test_unique_and_check(self):
        result = column("integer").unique().check("value > 0").render()
        assert result == "integer UNIQUE CHECK (value > 0)"

    def test_append(self):
        assert str(column("string").append("COLLATE nocase")) == "string COLLATE nocase"

    def test_null(self):
        """An explicitly nullable column without default states DEFAULT NULL."""
        assert str(column("string").null()) == "string NULL DEFAULT NULL"

    def test_unknown_type_uses_default_template(self):
        assert str(column("geometry").not_null()) == "geometry NOT NULL"


class TestDefaults:
    """Tests for default value rendering."""

    def test_float_keeps_decimal_point(self):
        assert str(column("integer").default_value(3.0)) == "integer DEFAULT 3.0"

    def test_float_ignores_comma_decimal_locale(self, comma_decimal_locale):
        assert locale.str(3.5) == "3,5"
        assert str(column("integer").default_value(3.0)) == "integer DEFAULT 3.0"

    def test_int(self):
        assert str(column("integer").default_value(0)) == "integer DEFAULT 0"

    @pytest.mark.parametrize("value, expected", [(True, "TRUE"), (False, "FALSE")])
    def test_bool(self, value, expected):
        assert str(column("boolean").default_value(value)) == f"boolean DEFAULT {expected}"

    def test_string(self):
        assert str(column("string").default_value("abc")) == "string DEFAULT 'abc'"

    def test_none_default_makes_column_nullable(self):
        builder = column("string").not_null().default_value(None)

        assert builder.is_not_null is False
        assert str(builder) == "string NULL DEFAULT NULL"

    def test_expression(self):
        builder = column("timestamp").default_expression("CURRENT_TIMESTAMP")
        assert str(builder) == "timestamp DEFAULT CURRENT_TIMESTAMP"

    def test_expression_object(self):
        builder = column("timestamp").default_value(RawExpression("NOW()"))
        assert str(builder) == "timestamp DEFAULT NOW()"

    def test_generic_string_default_is_not_escaped(self):
        assert str(column("string").default_value("it's")) == "string DEFAULT 'it's'"

    def test_postgresql_string_default_is_escaped(self):
        builder = column("string", dialect="postgresql").default_value("it's")
        assert str(builder) == "string DEFAULT 'it''s'"

    def test_placeholder_text_in_value_is_not_expanded(self):
        """Substituted fragments are never scanned for placeholders again."""
        builder = column("string").unique().default_value("{unique}")
        assert str(builder) == "string UNIQUE DEFAULT '{unique}'"


class TestUnsigned:
    def test_pk_becomes_upk(self):
        builder = column("pk").unsigned()

        assert builder.type == "upk"
        assert str(builder) == "upk"

    def test_bigpk_becomes_ubigpk(self):
        assert str(column("bigpk", dialect="mysql").unsigned()) == "ubigpk"

    def test_generic_drops_unsigned(self):
        assert str(column("integer").unsigned()) == "integer"

    def test_mysql_numeric_unsigned(self):
        builder = column("integer", dialect="mysql").unsigned().not_null()
        assert str(builder) == "integer UNSIGNED NOT NULL"

    def test_mysql_string_ignores_unsigned(self):
        assert str(column("string", dialect="mysql").unsigned()) == "string"


class TestPrimaryKey:
    def test_pk_template_drops_length_and_nullability(self):
        builder = column("pk", 11).not_null().default_value(1)
        assert str(builder) == "pk"

    def test_pk_check(self):
        assert str(column("pk").check("id > 0")) == "pk CHECK (id > 0)"


class TestMySQLExtensions:
    """Tests for dialect hooks only MySQL renders."""

    def test_comment(self):
        builder = column("string", 64, dialect="mysql").comment("User's name")
        assert str(builder) == "string(64) COMMENT 'User''s name'"

    def test_generic_drops_comment(self):
        assert str(column("string", 64).comment("User's name")) == "string(64)"

    def test_after(self):
        assert str(column("string", dialect="mysql").after("id")) == "string AFTER `id`"

    def test_first_wins_over_after(self):
        builder = column("string", dialect="mysql").after("id").first()
        assert str(builder) == "string FIRST"

    def test_full_numeric_definition(self):
        builder = (
            column("integer", 11, dialect="mysql")
            .unsigned()
            .not_null()
            .default_value(0)
            .comment("qty")
            .after("id")
        )

        assert str(builder) == "integer(11) UNSIGNED NOT NULL DEFAULT 0 COMMENT 'qty' AFTER `id`"

    def test_string_default_escapes_backslash(self):
        builder = column("string", dialect="mysql").default_value("C:\\tmp")
        assert str(builder) == "string DEFAULT 'C:\\\\tmp'"

    def test_custom_category_map(self):
        """A type mapped to a non-numeric category loses its unsigned fragment."""
        builder = column(
            "money", dialect="mysql", category_map={"money": TypeCategory.STRING}
        ).unsigned()

        assert builder.category == TypeCategory.STRING
        assert str(builder) == "money"


class TestBuilderBehaviour:
    def test_mutators_return_builder(self):
        builder = column("string")
        assert builder.not_null() is builder
        assert builder.unique() is builder
        assert builder.comment("x") is builder

    def test_rendering_is_idempotent(self):
        builder = column("decimal", [10, 2]).not_null().default_value(1.5)

        first = builder.render()

        assert builder.render() == first == "decimal(10,2) NOT NULL DEFAULT 1.5"
        assert builder.length == [10, 2]

    def test_default_dialect_from_settings(self, configure):
        configure(dialect="mysql")

        builder = ColumnSchemaBuilder("string").comment("x")

        assert builder.dialect.name == "mysql"
        assert str(builder) == "string COMMENT 'x'"

    def test_physical_type(self):
        """The rendered definition converts to a physical type per dialect."""
        builder = column("string", 64, dialect="mysql").not_null()

        assert QueryBuilder("mysql").get_column_type(builder) == "varchar(64) NOT NULL"

    def test_repr(self):
        assert repr(column("string", 8)) == "ColumnSchemaBuilder('string(8)', dialect='generic')"
