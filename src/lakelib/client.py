"""DuckLake catalog client"""

import logging
import warnings
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import duckdb
import pandas as pd

from lakelib.catalog import (
    CatalogBackend,
    parse_catalog_url,
    parse_data_source_url,
    requires_secret,
)
from lakelib.context import LakeContext
from lakelib.errors import ClientClosedError
from lakelib.primitives import Executor, QueryResult
from lakelib.statements import (
    Attach,
    AttachOptions,
    Checkpoint,
    Command,
    CreateSecret,
    DataSourceOptions,
    Detach,
    DropTable,
    Install,
    SecretOptions,
    Use,
)
from lakelib.utils.query import CallQuery
from lakelib.utils.quoting import quote, quote_identifier

logger = logging.getLogger(__name__)

Timestamp = Union[datetime, str]


class ClientState(str, Enum):
    """Construction progress of a Client"""
    UNCONFIGURED = "unconfigured"
    EXTENSIONS_INSTALLED = "extensions_installed"
    SECRET_CONFIGURED = "secret_configured"
    CATALOG_ATTACHED = "catalog_attached"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


class Client:
    """A session on one DuckLake catalog

    Construction installs the extensions, configures storage credentials,
    attaches the catalog under the ``ducklake`` alias, switches to it and
    detaches the default in-memory database. A failed construction detaches
    what it attached and closes the engine connection it opened; the client
    cannot be retried.

    Args:
        catalog_url: ``postgres://``, ``postgresql://``, ``mysql://``,
            ``mariadb://``, ``sqlite:///path`` or ``duckdb:///path``
        storage_url: Data file location; ``s3://`` gets a credential chain secret
        snapshot_version: Pin the catalog to a snapshot id
        snapshot_time: Pin the catalog to a point in time
        data_inlining_row_limit: Inline inserts up to this many rows in the catalog
        create_if_not_exists: Allow creating a new catalog
        override_data_path: Replace the stored data path (experimental)
        context: Existing LakeContext; a new in-memory one is created otherwise

    Example:
        >>> with Client("sqlite:///lake.sqlite", "data_files/", create_if_not_exists=True) as client:
        ...     client.sql("CREATE TABLE events (a bigint, b text)")
        ...     client.snapshots()
    """

    CATALOG = "ducklake"

    def __init__(
        self,
        catalog_url: str,
        storage_url: str,
        snapshot_version: Optional[int] = None,
        snapshot_time: Optional[Timestamp] = None,
        data_inlining_row_limit: int = 0,
        create_if_not_exists: bool = False,
        override_data_path: bool = False,
        context: Optional[LakeContext] = None,
    ):
        self._state = ClientState.UNCONFIGURED

        # resolved before any engine state exists
        target = parse_catalog_url(catalog_url)
        self._backend = target.backend

        secret_options = None
        if requires_secret(storage_url):
            secret_options = SecretOptions(type="s3")

        if override_data_path:
            warnings.warn(
                "override_data_path is experimental", UserWarning, stacklevel=2
            )

        attach_options = AttachOptions(
            data_path=storage_url,
            create_if_not_exists=create_if_not_exists,
            snapshot_version=snapshot_version,
            snapshot_time=snapshot_time,
            data_inlining_row_limit=data_inlining_row_limit,
            override_data_path=override_data_path,
        )

        self._context = context if context is not None else LakeContext()
        self._executor = Executor(self._context)

        try:
            self._install_extension("ducklake")
            if target.extension:
                self._install_extension(target.extension)
            self._state = ClientState.EXTENSIONS_INSTALLED

            if secret_options is not None:
                self._execute(CreateSecret(secret_options))
                self._state = ClientState.SECRET_CONFIGURED

            self._execute(Attach(self.CATALOG, f"ducklake:{target.attach_url}", attach_options))
            self._state = ClientState.CATALOG_ATTACHED

            self._execute(Use(self.CATALOG))
            self._execute(Detach("memory"))
        except Exception:
            self._rollback()
            raise

        self._state = ClientState.READY
        logger.info("Attached %s catalog as %r", self._backend.value, self.CATALOG)

    @classmethod
    def from_profile(
        cls,
        profile: str,
        path: Optional[Union[str, Path]] = None,
        **overrides: Any,
    ) -> "Client":
        """Create a client from a connections.toml profile

        Client arguments and engine settings are both read from the
        profile; keyword overrides take precedence.
        """
        from lakelib.config import load_profile

        cfg = load_profile(profile, path)
        cfg.update(overrides)
        missing = [key for key in ("catalog_url", "storage_url") if not cfg.get(key)]
        if missing:
            raise ValueError(f"Profile '{profile}' is missing required settings: {missing}")

        cfg.setdefault("keyring_service", f"lakelib.{profile}")
        context = LakeContext(**cfg)
        return cls(context=context, **context.settings())

    def _rollback(self) -> None:
        """Undo a partial construction; errors here never hide the original one"""
        failed_state = self._state
        self._state = ClientState.FAILED

        if failed_state == ClientState.CATALOG_ATTACHED:
            try:
                # the default database cannot be detached
                self._executor.run(Use("memory").sql())
                self._executor.run(Detach(self.CATALOG).sql())
            except duckdb.Error as e:
                logger.warning("Could not detach %r after failed setup: %s", self.CATALOG, e)

        if self._context.owns_connection:
            self._context.close()

    # Properties

    @property
    def catalog(self) -> str:
        """Alias the catalog is attached under"""
        return self.CATALOG

    @property
    def backend(self) -> CatalogBackend:
        return self._backend

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def context(self) -> LakeContext:
        """Access the underlying LakeContext"""
        return self._context

    # Queries

    def sql(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        """Execute caller SQL with positional ``?`` parameters"""
        return self._run(sql, params)

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> pd.DataFrame:
        """Execute SQL and return results as a DataFrame"""
        return self._run(sql, params).to_df()

    # Data sources

    def attach(self, alias: str, url: str) -> None:
        """Attach an external database read-only for cross-database queries

        Raises:
            UnsupportedDataSourceTypeError: For anything but a Postgres URL
        """
        target = parse_data_source_url(url)
        self._install_extension(target.extension)
        self._execute(Attach(alias, url, DataSourceOptions(type=target.type)))
        logger.info("Attached %s data source as %r", target.type, alias)

    def detach(self, alias: str) -> None:
        self._execute(Detach(alias))
        logger.info("Detached %r", alias)

    # Metadata

    def table_info(self) -> list[dict[str, Any]]:
        return self._call(CallQuery("ducklake_table_info", select=True).arg(self.CATALOG))

    def drop_table(self, table: str, if_exists: bool = False) -> None:
        self._execute(DropTable(table, if_exists=if_exists))

    # https://ducklake.select/docs/stable/duckdb/usage/snapshots
    def snapshots(self) -> list[dict[str, Any]]:
        return self._call(CallQuery("ducklake_snapshots", select=True).arg(self.CATALOG))

    # https://ducklake.select/docs/stable/duckdb/usage/configuration
    def options(self) -> list[dict[str, Any]]:
        return self._call(CallQuery("ducklake_options", select=True).arg(self.CATALOG))

    def set_option(self, name: str, value: Any, table_name: Optional[str] = None) -> None:
        """Set a catalog option globally or for one table

        Setting an option again adds another entry rather than replacing
        the earlier one; read the most recent entry for the scope.
        """
        q = CallQuery("ducklake_set_option").arg(self.CATALOG, name, value)
        q.when(table_name is not None, "table_name", table_name)
        self._call(q)

    def format_version(self) -> str:
        result = self._run(
            "SELECT value FROM ducklake_options(?) WHERE option_name = ?",
            [self.CATALOG, "version"],
        )
        return result.records[0]["value"]

    def extension_version(self) -> str:
        result = self._run(
            "SELECT extension_version FROM duckdb_extensions() WHERE extension_name = ?",
            ["ducklake"],
        )
        return result.records[0]["extension_version"]

    def duckdb_version(self) -> str:
        return self._run("SELECT VERSION() AS version").records[0]["version"]

    # Maintenance

    # https://ducklake.select/docs/stable/duckdb/maintenance/merge_adjacent_files
    def merge_adjacent_files(self) -> None:
        self._call(CallQuery("merge_adjacent_files"))

    # https://ducklake.select/docs/stable/duckdb/maintenance/expire_snapshots
    def expire_snapshots(
        self,
        older_than: Optional[Timestamp] = None,
        dry_run: bool = False,
    ) -> list[dict[str, Any]]:
        q = CallQuery("ducklake_expire_snapshots").arg(self.CATALOG)
        q.when(older_than is not None, "older_than", older_than)
        q.when(dry_run, "dry_run", dry_run)
        return self._call(q)

    # https://ducklake.select/docs/stable/duckdb/maintenance/cleanup_old_files
    def cleanup_old_files(
        self,
        cleanup_all: bool = False,
        older_than: Optional[Timestamp] = None,
        dry_run: bool = False,
    ) -> list[dict[str, Any]]:
        q = CallQuery("ducklake_cleanup_old_files").arg(self.CATALOG)
        q.when(cleanup_all, "cleanup_all", cleanup_all)
        q.when(older_than is not None, "older_than", older_than)
        q.when(dry_run, "dry_run", dry_run)
        return self._call(q)

    # https://ducklake.select/docs/stable/duckdb/maintenance/rewrite_data_files
    def rewrite_data_files(
        self,
        table: Optional[str] = None,
        delete_threshold: Optional[float] = None,
    ) -> None:
        q = CallQuery("ducklake_rewrite_data_files").arg(self.CATALOG)
        q.arg_when(table is not None, table)
        q.when(delete_threshold is not None, "delete_threshold", delete_threshold)
        self._call(q)

    # https://ducklake.select/docs/stable/duckdb/maintenance/checkpoint
    def checkpoint(self) -> None:
        self._execute(Checkpoint())

    # https://ducklake.select/docs/stable/duckdb/advanced_features/data_inlining
    def flush_inlined_data(self, table_name: Optional[str] = None) -> None:
        q = CallQuery("ducklake_flush_inlined_data").arg(self.CATALOG)
        q.when(table_name is not None, "table_name", table_name)
        self._call(q)

    # Files

    # https://ducklake.select/docs/stable/duckdb/metadata/list_files
    def list_files(
        self,
        table: str,
        snapshot_version: Optional[int] = None,
        snapshot_time: Optional[Timestamp] = None,
    ) -> list[dict[str, Any]]:
        q = CallQuery("ducklake_list_files", select=True).arg(self.CATALOG, table)
        q.when(snapshot_version is not None, "snapshot_version", snapshot_version)
        q.when(snapshot_time is not None, "snapshot_time", snapshot_time)
        return self._call(q)

    # https://ducklake.select/docs/stable/duckdb/metadata/adding_files
    def add_data_files(
        self,
        table: str,
        data: str,
        allow_missing: Optional[bool] = None,
        ignore_extra_columns: Optional[bool] = None,
    ) -> None:
        """Register existing Parquet files with a table

        The catalog takes ownership of the files and may delete them later.
        """
        q = CallQuery("ducklake_add_data_files").arg(self.CATALOG, table, data)
        q.when(allow_missing is not None, "allow_missing", allow_missing)
        q.when(ignore_extra_columns is not None, "ignore_extra_columns", ignore_extra_columns)
        self._call(q)

    # Quoting

    def quote_identifier(self, value: str) -> str:
        return quote_identifier(value)

    def quote(self, value: Any) -> str:
        return quote(value)

    # Execution

    def _install_extension(self, extension: str) -> None:
        self._execute(Install(extension))

    def _execute(self, command: Command) -> QueryResult:
        return self._run(command.sql())

    def _call(self, q: CallQuery) -> list[dict[str, Any]]:
        sql, bindings = q.as_tuple()
        return self._run(sql, bindings).records

    def _run(self, sql: str, params: Optional[Sequence[Any]] = None) -> QueryResult:
        if self._state in (ClientState.CLOSED, ClientState.FAILED):
            raise ClientClosedError(f"Client is {self._state.value}")
        return self._executor.run(sql, params)

    # Lifecycle

    def close(self) -> None:
        """Close the engine connection if this client's context owns it"""
        if self._state == ClientState.CLOSED:
            return
        self._state = ClientState.CLOSED
        self._context.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Client(catalog={self.CATALOG!r}, backend={self._backend.value!r}, state={self._state.value!r})"


def create_client(
    catalog_url: Optional[str] = None,
    storage_url: Optional[str] = None,
    profile: Optional[str] = None,
    **options: Any,
) -> Client:
    """Create a client from explicit URLs or a connections.toml profile"""
    if profile is not None:
        if catalog_url is not None:
            options["catalog_url"] = catalog_url
        if storage_url is not None:
            options["storage_url"] = storage_url
        return Client.from_profile(profile, **options)

    if catalog_url is None or storage_url is None:
        raise ValueError("create_client requires 'catalog_url' and 'storage_url' or a 'profile'")
    return Client(catalog_url, storage_url, **options)
