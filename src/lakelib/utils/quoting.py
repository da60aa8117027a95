"""Literal encoding and identifier quoting for DuckDB SQL

DuckDB has no client-side quoting function, so literals for commands that
cannot take placeholders (ATTACH, CREATE SECRET) are rendered here.
See https://duckdb.org/docs/stable/sql/dialect/keywords_and_identifiers.html
"""

import math
import re
from datetime import date, datetime, time, timezone
from typing import Any, Union

from lakelib.errors import InvalidOptionNameError, UnsupportedTypeError

SqlValue = Union[None, bool, int, float, str, datetime, date, time]

_OPTION_NAME = re.compile(r"^[A-Z_]+$")
_TOKEN = re.compile(r"^[a-z_][a-z0-9_]*$")


def _format_timestamp(value: datetime) -> str:
    """Naive datetimes are taken as UTC, aware ones are converted to it"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def quote_identifier(name: str) -> str:
    """Wrap an identifier in double quotes, doubling embedded double quotes"""
    return '"' + name.replace('"', '""') + '"'


def quote(value: Any) -> str:
    """Render a value as a DuckDB literal

    Example:
        >>> quote("it's")
        "'it''s'"
        >>> quote(datetime(2025, 1, 2, 3, 4, 5, 123456))
        "'2025-01-02T03:04:05.123456Z'"

    Raises:
        UnsupportedTypeError: If the value is not one of the SqlValue types
    """
    if value is None:
        return "NULL"
    # bool before int, bool is an int subclass
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # bare nan and inf parse as column names
        if not math.isfinite(value):
            return f"'{value}'::DOUBLE"
        return str(value)

    if isinstance(value, datetime):
        value = _format_timestamp(value)
    elif isinstance(value, (date, time)):
        value = value.isoformat()

    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"

    raise UnsupportedTypeError(f"can't quote value of type {type(value).__name__}")


quote_literal = quote


def encode_bind_value(value: Any) -> SqlValue:
    """Convert a value to what the engine binds natively for a placeholder

    Naive datetimes bind as TIMESTAMP. Aware ones are normalized to UTC and
    keep their zone so they bind as TIMESTAMPTZ, independent of the
    session TimeZone setting.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value
    if isinstance(value, (date, time)):
        return value
    raise UnsupportedTypeError(f"can't bind value of type {type(value).__name__}")


def option_name(key: str) -> str:
    """Uppercase an option key and check it is a bare token"""
    name = key.upper()
    # option keys are internal constants, never user input
    if not _OPTION_NAME.match(name):
        raise InvalidOptionNameError(f"Invalid option name: {key!r}")
    return name


def is_valid_identifier(name: str) -> bool:
    """Check if a string is a bare lowercase function or argument name"""
    if not name:
        return False
    return bool(_TOKEN.match(name))
