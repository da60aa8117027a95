"""DuckDB engine connection management with profile support."""

from typing import Optional, Any, Literal

import duckdb

from .base import BaseConnector


class DuckDBConnector(BaseConnector):
    """
    DuckDB connection manager with TOML profile support and context manager protocol.

    Owns exactly one engine connection. The connection is not safe for
    concurrent use; use one connector per thread.

    Args:
        profile: Name of the profile to load from connections.toml
        **kwargs: Additional settings to override profile settings

    Profile settings used here:
        database: Engine database path (default ":memory:")
        duckdb: Table of engine configuration options

    Example:
        >>> with DuckDBConnector(profile="dev") as conn:
        ...     conn.execute("SELECT version()").fetchone()
    """

    def __init__(self, profile: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(profile, **kwargs)

        # Connection initialized lazily
        self._connection: Optional[duckdb.DuckDBPyConnection] = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        """
        Open the engine connection if not already open.

        Returns:
            The DuckDB connection
        """
        if self._connection is None:
            self._connection = duckdb.connect(
                database=self._cfg.get("database", ":memory:"),
                config=dict(self._cfg.get("duckdb", {})),
            )
        return self._connection

    def close(self) -> None:
        """Close the connection, releasing resources."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> duckdb.DuckDBPyConnection:
        return self.connect()

    def __exit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any
    ) -> Literal[False]:
        """
        Context manager exit: close connection.

        Always returns False to propagate any exceptions.
        """
        self.close()
        return False

    def __repr__(self) -> str:
        """String representation of the connector, without credentials."""
        status = "connected" if self._connection else "not connected"
        return f"DuckDBConnector(profile={self._profile!r}, {status})"
