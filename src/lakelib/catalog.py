"""Catalog and data source URL resolution"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lakelib.errors import UnsupportedCatalogTypeError, UnsupportedDataSourceTypeError


class CatalogBackend(str, Enum):
    """Relational store holding the DuckLake metadata"""
    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    DUCKDB_FILE = "duckdb-file"


@dataclass(frozen=True)
class CatalogTarget:
    """Backend, required extension and rewritten attach URL for a catalog URL"""
    backend: CatalogBackend
    extension: Optional[str]
    attach_url: str


@dataclass(frozen=True)
class DataSourceTarget:
    """Attach type and extension for a secondary data source"""
    type: str
    extension: str


def parse_catalog_url(url: str) -> CatalogTarget:
    """Resolve a catalog URL to its backend

    Example:
        >>> parse_catalog_url("sqlite:///lake.sqlite").attach_url
        'sqlite:lake.sqlite'
        >>> parse_catalog_url("sqlite:////tmp/lake.sqlite").attach_url
        'sqlite:/tmp/lake.sqlite'

    Raises:
        UnsupportedCatalogTypeError: If the scheme is not recognized
    """
    if url.startswith(("postgres://", "postgresql://")):
        return CatalogTarget(CatalogBackend.POSTGRES, "postgres", f"postgres:{url}")
    if url.startswith(("mysql://", "mariadb://")):
        return CatalogTarget(CatalogBackend.MYSQL, "mysql", f"mysql:{url}")
    if url.startswith("sqlite:///"):
        return CatalogTarget(CatalogBackend.SQLITE, "sqlite", f"sqlite:{url[len('sqlite:///'):]}")
    if url.startswith("duckdb:///"):
        return CatalogTarget(CatalogBackend.DUCKDB_FILE, None, f"duckdb:{url[len('duckdb:///'):]}")
    raise UnsupportedCatalogTypeError("Unsupported catalog type")


def parse_data_source_url(url: str) -> DataSourceTarget:
    """Resolve a secondary data source URL; only Postgres is supported

    Raises:
        UnsupportedDataSourceTypeError: If the scheme is not recognized
    """
    if url.startswith(("postgres://", "postgresql://")):
        return DataSourceTarget(type="postgres", extension="postgres")
    raise UnsupportedDataSourceTypeError("Unsupported data source type")


def requires_secret(storage_url: str) -> bool:
    """Object store URLs need a credential secret before attaching"""
    return storage_url.startswith("s3://")
