"""Utilities for building administrative calls with safe parameter binding"""

from typing import Any

from lakelib.utils.quoting import is_valid_identifier


class CallQuery:
    """Build a CALL (or table function SELECT) with placeholder arguments

    Optional arguments are added only when their condition holds, so the
    engine sees them as absent rather than NULL. Named arguments are always
    rendered after positional ones.

    Example:
        >>> q = CallQuery("ducklake_expire_snapshots").arg("ducklake")
        >>> q.when(True, "dry_run", True).sql()
        'CALL ducklake_expire_snapshots(?, dry_run => ?)'
    """

    def __init__(self, function: str, select: bool = False):
        """Initialize with the function name to call"""
        if not is_valid_identifier(function):
            raise ValueError(f"Invalid function name: {function!r}")
        self._function = function
        self._select = select
        self._positional: list[Any] = []
        self._named: list[tuple[str, Any]] = []

    def arg(self, *values: Any) -> 'CallQuery':
        """Add positional arguments"""
        self._positional.extend(values)
        return self

    def arg_when(self, condition: Any, value: Any) -> 'CallQuery':
        """Add a positional argument when condition is truthy"""
        if condition:
            self._positional.append(value)
        return self

    def when(self, condition: Any, name: str, value: Any) -> 'CallQuery':
        """Add a named argument when condition is truthy"""
        if not is_valid_identifier(name):
            raise ValueError(f"Invalid argument name: {name!r}")
        if condition:
            self._named.append((name, value))
        return self

    def sql(self) -> str:
        """Get the SQL string with placeholders"""
        args = ["?"] * len(self._positional)
        args.extend(f"{name} => ?" for name, _ in self._named)
        call = f"{self._function}({', '.join(args)})"
        if self._select:
            return f"SELECT * FROM {call}"
        return f"CALL {call}"

    def bindings(self) -> tuple[Any, ...]:
        """Get the bindings tuple, positional values first"""
        return tuple(self._positional) + tuple(value for _, value in self._named)

    def as_tuple(self) -> tuple[str, tuple[Any, ...]]:
        """Get both SQL and bindings as a tuple"""
        return self.sql(), self.bindings()
