"""
lakelib - Python-DuckLake utilities

Code is organized in layers
- config/ and connection/ as the interface for the duckdb package
- primitives/ wraps the connection in statement execution and results
- client.py manages one attached DuckLake catalog and its maintenance calls
"""

# Layer 1: Core connectivity
from lakelib.config import load_profile, list_profiles
from lakelib.connection import DuckDBConnector
from lakelib.context import LakeContext

# Layer 2: Primitives
from lakelib.primitives import (
    QueryResult,
    Executor,
    execute_sql,
    query,
)

# Layer 3: Catalog client
from lakelib.catalog import CatalogBackend
from lakelib.client import Client, ClientState, create_client
from lakelib.errors import (
    LakeError,
    UnsupportedCatalogTypeError,
    UnsupportedDataSourceTypeError,
    InvalidOptionNameError,
    UnsupportedTypeError,
    ParameterBindError,
    ClientClosedError,
)
from lakelib.utils import quote, quote_identifier

__version__ = "0.1.0"
__all__ = [
    # Layer 1: Configuration & Connection
    "load_profile",
    "list_profiles",
    "DuckDBConnector",
    "LakeContext",
    # Layer 2: Execution
    "QueryResult",
    "Executor",
    "execute_sql",
    "query",
    # Layer 3: Client
    "CatalogBackend",
    "Client",
    "ClientState",
    "create_client",
    "quote",
    "quote_identifier",
    # Errors
    "LakeError",
    "UnsupportedCatalogTypeError",
    "UnsupportedDataSourceTypeError",
    "InvalidOptionNameError",
    "UnsupportedTypeError",
    "ParameterBindError",
    "ClientClosedError",
]
