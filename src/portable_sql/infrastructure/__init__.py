"""
Infrastructure Layer

Components:
- sql: identifier quoting, parameter binding, dialects, expression model,
  condition builders and the query builder
- schema: abstract column types, type categories, column schema builder
  and table DDL helpers
"""

__all__: list[str] = []
