"""A materialized, immutable interface for DuckDB query results"""
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Iterator, Optional

import pandas as pd


@dataclass(frozen=True)
class QueryResult:
    """Column names and rows of one query, fully fetched

    Column names need not be unique. The ``records`` view maps names to
    values, so a repeated name keeps the value of its last column there;
    ``rows`` is unaffected.
    """
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[Any, ...], ...] = ()

    @classmethod
    def from_cursor(cls, cursor: Any) -> "QueryResult":
        """Fetch everything from an executed DuckDB cursor"""
        if not cursor.description:
            return cls()
        columns = tuple(desc[0] for desc in cursor.description)
        rows = tuple(tuple(row) for row in cursor.fetchall())
        return cls(columns=columns, rows=rows)

    @cached_property
    def records(self) -> list[dict[str, Any]]:
        """Rows as column name to value mappings"""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def fetch_one(self) -> Optional[tuple[Any, ...]]:
        """The first row, or None for an empty result"""
        return self.rows[0] if self.rows else None

    def fetch_all(self) -> list[tuple[Any, ...]]:
        """All rows as a list"""
        return list(self.rows)

    def to_df(self, lowercase_columns: bool = False) -> pd.DataFrame:
        """All rows as a DataFrame with optional column casing"""
        df = pd.DataFrame(list(self.rows), columns=list(self.columns))
        if lowercase_columns and len(df.columns) > 0:
            df.columns = df.columns.str.lower()
        return df

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"QueryResult(columns={list(self.columns)!r}, rows={len(self.rows)})"
