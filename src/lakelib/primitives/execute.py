"""Execute SQL with positional parameter binding"""

import logging
import re
from typing import Any, Optional, Sequence

import duckdb
import pandas as pd

from lakelib.context import LakeContext
from lakelib.errors import ParameterBindError
from lakelib.utils.quoting import encode_bind_value

from .result import QueryResult

logger = logging.getLogger(__name__)


# Engine wordings for too many or too few placeholder values
_BIND_ERROR = re.compile(
    r"Prepared statement needs \d+ parameters?, \d+ given"
    r"|Values were not provided for the following prepared statement parameters"
    r"|Parameter argument/count mismatch"
)


def _is_bind_error(exc: duckdb.InvalidInputException) -> bool:
    """The engine reports placeholder count mismatches as invalid input"""
    return _BIND_ERROR.search(str(exc)) is not None


class Executor:
    """Run statements on a context's engine connection"""

    def __init__(self, context: LakeContext):
        self.context = context

    def run(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None
    ) -> QueryResult:
        """Execute SQL and return a fully materialized QueryResult

        Parameters are bound to ``?`` placeholders in the order given.
        Engine errors propagate unchanged, except a parameter count mismatch,
        which is raised as ParameterBindError with the engine's message.
        """
        bindings = [encode_bind_value(p) for p in params] if params else None
        logger.debug("Executing statement with %d parameter(s)", len(bindings or ()))

        connection = self.context.connection
        try:
            if bindings is None:
                cursor = connection.execute(sql)
            else:
                cursor = connection.execute(sql, bindings)
        except duckdb.InvalidInputException as e:
            if _is_bind_error(e):
                raise ParameterBindError(str(e)) from e
            raise

        return QueryResult.from_cursor(cursor)


def execute_sql(
    sql: str, context: LakeContext, params: Optional[Sequence[Any]] = None
) -> QueryResult:
    """Execute SQL and return a QueryResult"""
    return Executor(context).run(sql, params)


def query(
    sql: str, context: LakeContext, params: Optional[Sequence[Any]] = None
) -> pd.DataFrame:
    """Execute SQL and return results as a DataFrame"""
    return Executor(context).run(sql, params).to_df()
