"""Statement assembly: the Query object and the QueryBuilder."""

from .builder import QueryBuilder
from .query import Query, to_expression

__all__ = [
    "Query",
    "QueryBuilder",
    "to_expression",
]
