"""Shared fixtures for unit tests.

The fake engine stands in for a DuckDB connection so the statements a
client issues can be inspected without downloading extensions.
"""

from typing import Any, Optional
from unittest.mock import Mock

import pytest

from lakelib.context import LakeContext


class FakeEngine:
    """Records executed statements and replays canned results by SQL prefix"""

    def __init__(self):
        self.statements: list[tuple[str, Optional[list[Any]]]] = []
        self.results: dict[str, tuple[list[str], list[tuple[Any, ...]]]] = {}
        self.failures: dict[str, Exception] = {}
        self.closed = False

    @property
    def sql(self) -> list[str]:
        return [sql for sql, _ in self.statements]

    def execute(self, sql: str, params: Optional[list[Any]] = None) -> Mock:
        self.statements.append((sql, params))
        for prefix, exc in self.failures.items():
            if sql.startswith(prefix):
                raise exc

        cursor = Mock()
        cursor.description = None
        for prefix, (columns, rows) in self.results.items():
            if sql.startswith(prefix):
                cursor.description = [(name, None) for name in columns]
                cursor.fetchall.return_value = rows
                break
        return cursor

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def fake_context(engine: FakeEngine) -> LakeContext:
    """Context wrapping the fake engine as an external connection"""
    return LakeContext(connection=engine)
