"""
Storage module for graph persistence.

Provides the DuckDB store handle and the node and edge stores built on it.
"""

from .duckdb_client import DuckDBClient
from .edge_store import EdgeStore
from .node_store import NodeStore

__all__ = [
    "DuckDBClient",
    "EdgeStore",
    "NodeStore",
]
