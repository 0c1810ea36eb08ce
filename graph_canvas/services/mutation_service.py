"""
Graph Mutation Service - write side of the graph API.

Every mutation runs inside one store transaction. The cascading node delete
removes the node's edges and the node itself atomically: if the node turns
out to be missing, the edge deletions are rolled back too.
"""

import logging
from typing import Optional, Tuple

from ..models.graph import Edge, EdgeDraft, EdgePatch, Node, NodeDraft, NodePatch
from ..storage.duckdb_client import DuckDBClient
from ..storage.edge_store import EdgeStore
from ..storage.node_store import NodeStore
from ..utils.exceptions import NotFoundError
from ..utils.validators import validate_edge_draft, validate_entity_id

logger = logging.getLogger(__name__)


class GraphMutationService:
    """Create, update and delete nodes and edges."""

    def __init__(
        self,
        db: DuckDBClient,
        nodes: Optional[NodeStore] = None,
        edges: Optional[EdgeStore] = None,
    ):
        """
        Initialize the mutation service.

        Args:
            db: Store handle providing transactions
            nodes: Node store (default: new NodeStore)
            edges: Edge store (default: new EdgeStore)
        """
        self.db = db
        self.nodes = nodes or NodeStore()
        self.edges = edges or EdgeStore()

    # ==================== Node Operations ====================

    async def create_node(self, draft: NodeDraft) -> Node:
        """
        Create a node.

        Raises:
            ValidationError: If the label is missing or empty
        """
        async with self.db.transaction() as conn:
            return self.nodes.create(conn, draft)

    async def update_node(self, node_id: str, patch: NodePatch) -> Node:
        """
        Apply an allow-listed partial update to a node.

        Raises:
            ValidationError: If the ID is malformed or the patch is invalid
            NotFoundError: If the node does not exist
        """
        canonical = validate_entity_id(node_id, "node").unwrap()
        async with self.db.transaction() as conn:
            return self.nodes.update(conn, canonical, patch)

    async def delete_node(self, node_id: str) -> int:
        """
        Delete a node together with every edge that references it.

        Args:
            node_id: Node ID

        Returns:
            Number of edges removed alongside the node

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the node does not exist (nothing is deleted)
        """
        canonical = validate_entity_id(node_id, "node").unwrap()

        async with self.db.transaction() as conn:
            removed_edges = self.edges.delete_for_node(conn, canonical)
            self.nodes.delete(conn, canonical)

        logger.info(f"Deleted node {canonical} and {removed_edges} connected edge(s)")
        return removed_edges

    # ==================== Edge Operations ====================

    async def create_edge(self, draft: EdgeDraft) -> Edge:
        """
        Create an edge between two existing nodes.

        The endpoint lookup and the insert share one transaction.

        Raises:
            ValidationError: If source/target are missing or malformed
            NotFoundError: If either endpoint node does not exist
        """
        valid = validate_edge_draft(draft).unwrap()

        async with self.db.transaction() as conn:
            found = self.nodes.existing_ids(conn, (valid.source, valid.target))
            if valid.source not in found or valid.target not in found:
                raise NotFoundError("One or both nodes not found", entity="node")
            return self.edges.create(conn, valid)

    async def update_edge(self, edge_id: str, patch: EdgePatch) -> Edge:
        """
        Apply an allow-listed partial update to an edge.

        Raises:
            ValidationError: If the ID is malformed or a set field is null
            NotFoundError: If the edge does not exist
        """
        canonical = validate_entity_id(edge_id, "edge").unwrap()
        async with self.db.transaction() as conn:
            return self.edges.update(conn, canonical, patch)

    async def delete_edge(self, edge_id: str) -> None:
        """
        Delete an edge. No cascading effects.

        Raises:
            ValidationError: If the ID is malformed
            NotFoundError: If the edge does not exist
        """
        canonical = validate_entity_id(edge_id, "edge").unwrap()
        async with self.db.transaction() as conn:
            self.edges.delete(conn, canonical)

    # ==================== Bulk Operations ====================

    async def clear_graph(self) -> Tuple[int, int]:
        """
        Delete every edge and every node in one transaction.

        Returns:
            Tuple of (nodes removed, edges removed)
        """
        async with self.db.transaction() as conn:
            removed_edges = self.edges.delete_all(conn)
            removed_nodes = self.nodes.delete_all(conn)

        logger.info(f"Cleared graph: {removed_nodes} nodes, {removed_edges} edges")
        return removed_nodes, removed_edges
