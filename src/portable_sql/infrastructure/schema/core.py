"""Abstract column types and their categories.

Abstract types are database-agnostic names ("pk", "string", ...) that each
dialect maps to physical SQL. The category of a type decides which DDL
fragments are meaningful for it.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, Optional, Union


class ColumnType(str, Enum):
    """Abstract column types understood by every dialect."""

    PK = "pk"
    UPK = "upk"
    BIGPK = "bigpk"
    UBIGPK = "ubigpk"
    CHAR = "char"
    STRING = "string"
    TEXT = "text"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    DATE = "date"
    BINARY = "binary"
    BOOLEAN = "boolean"
    MONEY = "money"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


class TypeCategory(str, Enum):
    """Categories that abstract column types fall under."""

    PK = "pk"
    STRING = "string"
    NUMERIC = "numeric"
    TIME = "time"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


CATEGORY_MAP: Dict[str, TypeCategory] = {
    ColumnType.PK.value: TypeCategory.PK,
    ColumnType.UPK.value: TypeCategory.PK,
    ColumnType.BIGPK.value: TypeCategory.PK,
    ColumnType.UBIGPK.value: TypeCategory.PK,
    ColumnType.CHAR.value: TypeCategory.STRING,
    ColumnType.STRING.value: TypeCategory.STRING,
    ColumnType.TEXT.value: TypeCategory.STRING,
    ColumnType.TINYINT.value: TypeCategory.NUMERIC,
    ColumnType.SMALLINT.value: TypeCategory.NUMERIC,
    ColumnType.INTEGER.value: TypeCategory.NUMERIC,
    ColumnType.BIGINT.value: TypeCategory.NUMERIC,
    ColumnType.FLOAT.value: TypeCategory.NUMERIC,
    ColumnType.DOUBLE.value: TypeCategory.NUMERIC,
    ColumnType.DECIMAL.value: TypeCategory.NUMERIC,
    ColumnType.DATETIME.value: TypeCategory.TIME,
    ColumnType.TIMESTAMP.value: TypeCategory.TIME,
    ColumnType.TIME.value: TypeCategory.TIME,
    ColumnType.DATE.value: TypeCategory.TIME,
    ColumnType.BINARY.value: TypeCategory.OTHER,
    ColumnType.BOOLEAN.value: TypeCategory.NUMERIC,
    ColumnType.MONEY.value: TypeCategory.NUMERIC,
    ColumnType.JSON.value: TypeCategory.OTHER,
}

# unsigned() rewrites primary-key types to their unsigned counterparts
UNSIGNED_TYPES: Dict[str, ColumnType] = {
    ColumnType.PK.value: ColumnType.UPK,
    ColumnType.BIGPK.value: ColumnType.UBIGPK,
}


def get_type_category(
    column_type: Union[str, ColumnType],
    category_map: Optional[Mapping[str, TypeCategory]] = None,
) -> TypeCategory:
    """Return the category of an abstract type; unknown types are OTHER."""
    mapping = CATEGORY_MAP if category_map is None else category_map
    return mapping.get(str(column_type), TypeCategory.OTHER)


__all__ = [
    "ColumnType",
    "TypeCategory",
    "CATEGORY_MAP",
    "UNSIGNED_TYPES",
    "get_type_category",
]
