"""Pytest configuration and shared fixtures for integration tests.

Integration tests run against the DuckLake catalog described by the
``[test]`` table of ``test_config.toml`` in the lakelib config directory::

    [test]
    catalog_url = "postgres://localhost/lakelib_test"
    storage_url = "/tmp/lakelib_test/data_files"

Without that file each test gets a fresh DuckDB file catalog with local
storage under its temporary directory.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict

# Use tomllib for Python 3.11+, fallback to tomli for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import pytest

from lakelib import Client
from lakelib.config import CONF_DIR

EVENTS_CSV = "a,b\n1,one\n2,two\n3,three\n"


def _load_test_config() -> Dict[str, Any]:
    """Load the [test] table of test_config.toml, empty when the file is missing"""
    test_config_path = CONF_DIR / "test_config.toml"
    if not test_config_path.exists():
        return {}

    with open(test_config_path, "rb") as f:
        return tomllib.load(f).get("test", {})


_TEST_CONFIG = _load_test_config()


@pytest.fixture
def client_options(tmp_path) -> Dict[str, Any]:
    """Catalog and storage URLs for integration tests"""
    if _TEST_CONFIG:
        missing = [key for key in ("catalog_url", "storage_url") if not _TEST_CONFIG.get(key)]
        if missing:
            pytest.skip(f"test_config.toml is missing {missing} in the [test] table")
        return {"catalog_url": _TEST_CONFIG["catalog_url"], "storage_url": _TEST_CONFIG["storage_url"]}

    data_files = tmp_path / "data_files"
    data_files.mkdir()
    return {
        "catalog_url": f"duckdb:///{tmp_path / 'lake.duckdb'}",
        "storage_url": str(data_files),
    }


@pytest.fixture
def new_client(client_options) -> Callable[..., Client]:
    """Factory for clients on the test catalog, closed after the test"""
    clients = []

    def factory(**options: Any) -> Client:
        c = Client(**{**client_options, **options})
        clients.append(c)
        return c

    yield factory

    for c in clients:
        c.close()


@pytest.fixture
def client(new_client) -> Client:
    """Client on the test catalog with no events table"""
    c = new_client(create_if_not_exists=True)
    c.drop_table("events", if_exists=True)
    return c


@pytest.fixture
def events_csv(tmp_path) -> Path:
    path = tmp_path / "data.csv"
    path.write_text(EVENTS_CSV)
    return path


@pytest.fixture
def create_events(client, events_csv) -> Callable[[], None]:
    def create() -> None:
        client.sql(f"CREATE TABLE events AS FROM {client.quote(str(events_csv))}")
    return create


@pytest.fixture
def load_events(client, events_csv) -> Callable[[], None]:
    def load() -> None:
        client.sql(f"COPY events FROM {client.quote(str(events_csv))}")
    return load


@pytest.fixture
def clear_snapshots(client) -> Callable[[], None]:
    def clear() -> None:
        client.expire_snapshots(older_than=datetime.now(timezone.utc))
    return clear


@pytest.fixture
def clear_old_files(client, clear_snapshots) -> Callable[[], None]:
    def clear() -> None:
        clear_snapshots()
        client.cleanup_old_files(cleanup_all=True)
    return clear
