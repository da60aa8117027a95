"""Connection module exports."""

from .base import BaseConnector
from .connection import DuckDBConnector

__all__ = [
    "BaseConnector",
    "DuckDBConnector",
]
