"""Primitive operations to wrap direct DuckDB connection calls"""

from lakelib.primitives.result import QueryResult
from lakelib.primitives.execute import (
    Executor,
    execute_sql,
    query,
)

__all__ = [
    "QueryResult",
    "Executor",
    "execute_sql",
    "query",
]
