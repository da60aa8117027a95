"""Quoting, value encoding and call building helpers"""

from lakelib.utils.quoting import (
    SqlValue,
    quote,
    quote_literal,
    quote_identifier,
    encode_bind_value,
    option_name,
    is_valid_identifier,
)
from lakelib.utils.query import CallQuery

__all__ = [
    "SqlValue",
    "quote",
    "quote_literal",
    "quote_identifier",
    "encode_bind_value",
    "option_name",
    "is_valid_identifier",
    "CallQuery",
]
