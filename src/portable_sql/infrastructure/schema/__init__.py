"""Abstract column types, the column schema builder and table DDL helpers."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

from .core import (
    CATEGORY_MAP,
    UNSIGNED_TYPES,
    ColumnType,
    TypeCategory,
    get_type_category,
)

_LAZY_EXPORTS = {
    "ColumnSchemaBuilder": ".column_builder",
    "generate_create_table_ddl": ".ddl_generator",
    "generate_drop_table_ddl": ".ddl_generator",
    "generate_add_column_ddl": ".ddl_generator",
    "generate_create_index_ddl": ".ddl_generator",
}

__all__ = [
    "ColumnType",
    "TypeCategory",
    "CATEGORY_MAP",
    "UNSIGNED_TYPES",
    "get_type_category",
    *_LAZY_EXPORTS,
]

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .column_builder import ColumnSchemaBuilder
    from .ddl_generator import (
        generate_add_column_ddl,
        generate_create_index_ddl,
        generate_create_table_ddl,
        generate_drop_table_ddl,
    )


# Dialects import .core, so modules that need dialects load on first access
def __getattr__(name: str) -> Any:
    if name in _LAZY_EXPORTS:
        module = importlib.import_module(_LAZY_EXPORTS[name], __name__)
        return getattr(module, name)
    raise AttributeError(f"module 'portable_sql.infrastructure.schema' has no attribute {name!r}")
