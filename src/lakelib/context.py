"""DuckDB connection context management"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from lakelib.connection import DuckDBConnector


class LakeContext:
    """Manages the engine connection lifecycle with lazy initialization

    Pass a profile name (connection created on demand), an existing DuckDB
    connection (reused, never closed here), or nothing for an in-memory
    engine configured from overrides.
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        connection: Optional[Any] = None,
        **overrides: Any,
    ):
        """Initialize context with a profile, a connection, or neither"""
        if profile is not None and connection is not None:
            raise ValueError(
                "LakeContext: provide either 'profile' or 'connection', not both"
            )

        self._profile = profile
        self._connection = connection
        self._overrides = overrides
        self._connector: Optional["DuckDBConnector"] = None
        self._owns_connector = False

    @property
    def connector(self) -> Optional["DuckDBConnector"]:
        """Connector for profile-based contexts, None when given a connection"""
        if self._connector is None and not self._has_external_connection:
            from lakelib.connection import DuckDBConnector

            self._connector = DuckDBConnector(
                profile=self._profile, **self._overrides
            )
        return self._connector

    @property
    def _has_external_connection(self) -> bool:
        return self._connection is not None and not self._owns_connector

    @property
    def connection(self) -> Any:
        """Get DuckDB connection, creating if needed"""
        if self._connection is None:
            connector = self.connector
            assert connector is not None
            self._connection = connector.connect()
            self._owns_connector = True

        return self._connection

    @property
    def owns_connection(self) -> bool:
        """Whether close() will close the engine connection"""
        return self._owns_connector

    def settings(self) -> dict[str, Any]:
        """Client options from the profile and overrides, empty for external connections"""
        connector = self.connector
        return connector.settings() if connector is not None else {}

    def close(self) -> None:
        """Close connection if owned by this context"""
        if self._owns_connector and self._connector is not None:
            self._connector.close()
            self._connector = None
            self._connection = None
            self._owns_connector = False

    def __enter__(self) -> "LakeContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def current_database(self) -> str:
        """Get current database (catalog) from session context"""
        result = self.connection.execute("SELECT current_database()").fetchone()
        return str(result[0]) if result and result[0] else ""

    @property
    def current_schema(self) -> str:
        """Get current schema from session context"""
        result = self.connection.execute("SELECT current_schema()").fetchone()
        return str(result[0]) if result and result[0] else ""

    def __repr__(self) -> str:
        if self._connection is not None:
            return "LakeContext(connection=<active>)"
        return f"LakeContext(profile={self._profile!r})"
