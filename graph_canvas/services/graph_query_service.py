"""
Graph Query Service - read side of the graph API.

This service is responsible for:
- Reading the whole graph (all nodes and all edges)
- Single node/edge lookups
- Substring search over node labels and types
"""

import logging
from typing import Any, Dict, List, Optional

from ..models.graph import Edge, Graph, Node
from ..storage.duckdb_client import DuckDBClient
from ..storage.edge_store import EdgeStore
from ..storage.node_store import NodeStore
from ..utils.constants import SEARCH_RESULT_LIMIT
from ..utils.validators import validate_entity_id, validate_search_query

logger = logging.getLogger(__name__)


class GraphQueryService:
    """Read-only access to nodes and edges."""

    def __init__(
        self,
        db: DuckDBClient,
        nodes: Optional[NodeStore] = None,
        edges: Optional[EdgeStore] = None,
    ):
        """
        Initialize the query service.

        Args:
            db: Store handle shared with the mutation service
            nodes: Node store (default: new NodeStore)
            edges: Edge store (default: new EdgeStore)
        """
        self.db = db
        self.nodes = nodes or NodeStore()
        self.edges = edges or EdgeStore()

    def get_graph(self) -> Graph:
        """
        Fetch all nodes and all edges.

        Both reads share one snapshot, so a committed cascading delete is
        either fully visible or not visible at all.
        """
        with self.db.snapshot() as conn:
            nodes = self.nodes.list_all(conn)
            edges = self.edges.list_all(conn)

        logger.debug(f"Fetched graph: {len(nodes)} nodes, {len(edges)} edges")
        return Graph(nodes=nodes, edges=edges)

    def get_node(self, node_id: str) -> Node:
        """
        Get a single node.

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the node does not exist
        """
        canonical = validate_entity_id(node_id, "node").unwrap()
        with self.db.snapshot() as conn:
            return self.nodes.get(conn, canonical)

    def get_edge(self, edge_id: str) -> Edge:
        """
        Get a single edge.

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the edge does not exist
        """
        canonical = validate_entity_id(edge_id, "edge").unwrap()
        with self.db.snapshot() as conn:
            return self.edges.get(conn, canonical)

    def search_nodes(self, query: Any, limit: int = SEARCH_RESULT_LIMIT) -> List[Node]:
        """
        Case-insensitive substring search over node label or type.

        Args:
            query: Raw ``q`` parameter; must be a single string
            limit: Maximum number of results

        Returns:
            Up to ``limit`` matching nodes; empty for a blank query

        Raises:
            ValidationError: If the query is missing or not a single string
        """
        text = validate_search_query(query).unwrap()
        if not text:
            return []

        with self.db.snapshot() as conn:
            return self.nodes.search(conn, text, limit)

    def stats(self) -> Dict[str, int]:
        """Node and edge counts."""
        with self.db.snapshot() as conn:
            return {
                "nodes": self.nodes.count(conn),
                "edges": self.edges.count(conn),
            }
