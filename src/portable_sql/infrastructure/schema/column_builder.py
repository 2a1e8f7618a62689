"""Column schema builder.

Renders the DDL fragment of a single column from an abstract type, its
length or precision and the constraints set through chained mutators:

    >>> ColumnSchemaBuilder("string", 255).not_null().render()
    'string(255) NOT NULL'

Dialect-specific fragments (UNSIGNED, COMMENT, FIRST/AFTER) come from the
dialect object the builder is created with; the generic dialect omits them.
Pass the result to ``QueryBuilder.get_column_type()`` to obtain the physical
type for a database.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union

from portable_sql.config import get_settings
from portable_sql.infrastructure.sql.dialects import Dialect, get_dialect
from portable_sql.infrastructure.sql.expressions.model import Expression, RawExpression
from portable_sql.utils.logging import get_logger

from .core import CATEGORY_MAP, UNSIGNED_TYPES, ColumnType, TypeCategory, get_type_category

logger = get_logger(__name__)

Length = Union[int, str, Sequence[Union[int, str]], None]

_PLACEHOLDERS = (
    "{type}",
    "{length}",
    "{unsigned}",
    "{notnull}",
    "{unique}",
    "{default}",
    "{check}",
    "{comment}",
    "{pos}",
    "{append}",
)


class ColumnSchemaBuilder:
    """
    Fluent definition of one column.

    Mutators change this instance and return it, so a definition reads as a
    single chain. ``render()`` (also ``str()``) never modifies the builder
    and can be called any number of times.
    """

    def __init__(
        self,
        column_type: Union[str, ColumnType],
        length: Length = None,
        dialect: Union[Dialect, str, None] = None,
        category_map: Optional[Mapping[str, TypeCategory]] = None,
    ):
        """
        Create a column schema builder.

        Args:
            column_type: Abstract type name, e.g. "string" or ColumnType.PK
            length: Size or precision; a sequence is joined with commas
            dialect: Dialect instance or name; defaults to the configured dialect
            category_map: Override of the abstract type -> category mapping
        """
        if dialect is None:
            dialect = get_settings().dialect
        self.dialect: Dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect
        self.category_map: Mapping[str, TypeCategory] = (
            CATEGORY_MAP if category_map is None else category_map
        )

        self.type = str(column_type)
        self.length = length
        self.is_not_null: Optional[bool] = None
        self.is_unique = False
        self.check_constraint: Optional[str] = None
        self.default: Any = None
        self.comment_text: Optional[str] = None
        self.is_unsigned = False
        self.after_column: Optional[str] = None
        self.is_first = False
        self.append_sql: Optional[str] = None

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def not_null(self) -> ColumnSchemaBuilder:
        """Adds a ``NOT NULL`` constraint to the column."""
        self.is_not_null = True
        return self

    def null(self) -> ColumnSchemaBuilder:
        """Adds a ``NULL`` constraint to the column."""
        self.is_not_null = False
        return self

    def unique(self) -> ColumnSchemaBuilder:
        """Adds a ``UNIQUE`` constraint to the column."""
        self.is_unique = True
        return self

    def check(self, check: Optional[str]) -> ColumnSchemaBuilder:
        """Sets the SQL of a ``CHECK`` constraint."""
        self.check_constraint = check
        return self

    def default_value(self, default: Any) -> ColumnSchemaBuilder:
        """
        Specify the default value for the column.

        A ``None`` default also marks the column as ``NULL``.
        """
        if default is None:
            self.null()
        self.default = default
        return self

    def default_expression(self, default: str) -> ColumnSchemaBuilder:
        """Specify a raw SQL expression (e.g. ``CURRENT_TIMESTAMP``) as default."""
        self.default = RawExpression(default)
        return self

    def comment(self, comment: Optional[str]) -> ColumnSchemaBuilder:
        self.comment_text = comment
        return self

    def unsigned(self) -> ColumnSchemaBuilder:
        """Marks the column as unsigned; ``pk`` and ``bigpk`` become ``upk``/``ubigpk``."""
        if self.type in UNSIGNED_TYPES:
            self.type = UNSIGNED_TYPES[self.type].value
        self.is_unsigned = True
        return self

    def after(self, column: str) -> ColumnSchemaBuilder:
        """Place the column after ``column`` (dialects that support positioning only)."""
        self.after_column = column
        return self

    def first(self) -> ColumnSchemaBuilder:
        """Place the column first in the table (dialects that support positioning only)."""
        self.is_first = True
        return self

    def append(self, sql: str) -> ColumnSchemaBuilder:
        """Specify additional SQL to be appended to the column definition."""
        self.append_sql = sql
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def category(self) -> TypeCategory:
        category = get_type_category(self.type, self.category_map)
        if category == TypeCategory.OTHER and self.type not in self.category_map:
            logger.debug("column_type_uncategorized", column_type=self.type)
        return category

    def render(self) -> str:
        """Build the full column definition."""
        template = self.dialect.column_template(self.category)
        return self._build_complete_string(template)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ColumnSchemaBuilder({self.render()!r}, dialect={self.dialect.name!r})"

    def _build_length_string(self) -> str:
        length = self.length
        if length is None or length == [] or length == ():
            return ""
        if isinstance(length, (list, tuple)):
            length = ",".join(str(part) for part in length)
        return f"({length})"

    def _build_not_null_string(self) -> str:
        if self.is_not_null is True:
            return " NOT NULL"
        if self.is_not_null is False:
            return " NULL"
        return ""

    def _build_unique_string(self) -> str:
        return " UNIQUE" if self.is_unique else ""

    def _build_default_string(self) -> str:
        default = self.default
        if default is None:
            return " DEFAULT NULL" if self.is_not_null is False else ""

        if isinstance(default, Expression):
            value = str(default)
        elif isinstance(default, bool):
            value = "TRUE" if default else "FALSE"
        elif isinstance(default, int):
            value = str(default)
        elif isinstance(default, float):
            # repr() always uses "." regardless of locale
            value = repr(default)
        else:
            value = self.dialect.build_default_string(str(default))
        return f" DEFAULT {value}"

    def _build_check_string(self) -> str:
        return f" CHECK ({self.check_constraint})" if self.check_constraint is not None else ""

    def _build_comment_string(self) -> str:
        if self.comment_text is None:
            return ""
        return self.dialect.build_comment(self.comment_text)

    def _build_unsigned_string(self) -> str:
        return self.dialect.build_unsigned() if self.is_unsigned else ""

    def _build_position_string(self) -> str:
        if self.is_first:
            return self.dialect.build_first()
        if self.after_column is not None:
            return self.dialect.build_after(self.after_column)
        return ""

    def _build_append_string(self) -> str:
        return f" {self.append_sql}" if self.append_sql is not None else ""

    def _build_complete_string(self, template: str) -> str:
        values: Dict[str, str] = {
            "{type}": self.type,
            "{length}": self._build_length_string(),
            "{unsigned}": self._build_unsigned_string(),
            "{notnull}": self._build_not_null_string(),
            "{unique}": self._build_unique_string(),
            "{default}": self._build_default_string(),
            "{check}": self._build_check_string(),
            "{comment}": self._build_comment_string(),
            "{pos}": self._build_position_string(),
            "{append}": self._build_append_string(),
        }
        # Single left-to-right pass; substituted text is never scanned again
        result = []
        index = 0
        while index < len(template):
            for placeholder in _PLACEHOLDERS:
                if template.startswith(placeholder, index):
                    result.append(values[placeholder])
                    index += len(placeholder)
                    break
            else:
                result.append(template[index])
                index += 1
        return "".join(result)
