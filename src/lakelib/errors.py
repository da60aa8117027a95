"""Exception types raised by lakelib"""

import duckdb


class LakeError(Exception):
    """Base class for errors raised locally by lakelib"""


class UnsupportedCatalogTypeError(LakeError, ValueError):
    """The catalog URL scheme is not a recognized catalog backend"""


class UnsupportedDataSourceTypeError(LakeError, ValueError):
    """The data source URL scheme cannot be attached"""


class InvalidOptionNameError(LakeError, ValueError):
    """An option key is not a bare uppercase token"""


class UnsupportedTypeError(LakeError, TypeError):
    """A value cannot be rendered as a literal or bound as a parameter"""


class ParameterBindError(LakeError, duckdb.InvalidInputException):
    """The engine rejected the parameter list for a prepared statement

    Carries the engine's message unchanged and still matches
    ``duckdb.InvalidInputException`` for callers that catch engine errors.
    """


class ClientClosedError(LakeError, RuntimeError):
    """An operation was issued on a closed or failed client"""
