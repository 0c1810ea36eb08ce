"""
Node storage layer.

CRUD operations for the nodes table. Every method takes the cursor of the
current unit of work (see ``DuckDBClient.snapshot`` and
``DuckDBClient.transaction``) so callers control transaction boundaries.
"""

import logging
from typing import Any, Iterable, List, Optional, Set

import duckdb

from ..models.graph import Node, NodeDraft, NodePatch
from ..utils.constants import SEARCH_RESULT_LIMIT
from ..utils.exceptions import NotFoundError
from ..utils.ids import new_id
from ..utils.types import NodeRow
from ..utils.validators import validate_node_draft, validate_node_patch
from .serialization import as_utc, dump_properties, load_properties, utcnow

logger = logging.getLogger(__name__)

NODE_COLUMNS = 'id, label, "type", properties, x, y, fx, fy, created_at, updated_at'


def _row_to_node(row: NodeRow) -> Node:
    return Node(
        id=row[0],
        label=row[1],
        type=row[2],
        properties=load_properties(row[3]),
        x=row[4],
        y=row[5],
        fx=row[6],
        fy=row[7],
        created_at=as_utc(row[8]),
        updated_at=as_utc(row[9]),
    )


class NodeStore:
    """
    CRUD operations for nodes table.

    Label/type invariants are enforced here, on create and on update.
    """

    def create(self, conn: duckdb.DuckDBPyConnection, draft: NodeDraft) -> Node:
        """
        Create a new node.

        Args:
            conn: Cursor of the current transaction
            draft: Creation fields; unset optional fields take their defaults

        Returns:
            Created node with assigned ID and timestamps

        Raises:
            ValidationError: If the label is missing or empty
        """
        valid = validate_node_draft(draft).unwrap()
        node_id = new_id()
        now = utcnow()

        row = conn.execute(
            f"""
            INSERT INTO nodes (id, label, "type", properties, x, y, fx, fy, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING {NODE_COLUMNS}
            """,
            (
                node_id,
                valid.label,
                valid.type,
                dump_properties(valid.properties),
                valid.x,
                valid.y,
                valid.fx,
                valid.fy,
                now,
                now,
            ),
        ).fetchone()

        logger.info(f"Created node: {node_id}")
        return _row_to_node(row)

    def find(self, conn: duckdb.DuckDBPyConnection, node_id: str) -> Optional[Node]:
        """Get node by ID, or None if not found."""
        row = conn.execute(
            f"SELECT {NODE_COLUMNS} FROM nodes WHERE id = ?",
            (node_id,),
        ).fetchone()
        return _row_to_node(row) if row else None

    def get(self, conn: duckdb.DuckDBPyConnection, node_id: str) -> Node:
        """
        Get node by ID.

        Raises:
            NotFoundError: If no node has this ID
        """
        node = self.find(conn, node_id)
        if node is None:
            raise NotFoundError("Node not found", entity="node", entity_id=node_id)
        return node

    def list_all(self, conn: duckdb.DuckDBPyConnection) -> List[Node]:
        """List all nodes in insertion order."""
        rows = conn.execute(f"SELECT {NODE_COLUMNS} FROM nodes ORDER BY seq").fetchall()
        return [_row_to_node(row) for row in rows]

    def existing_ids(
        self, conn: duckdb.DuckDBPyConnection, node_ids: Iterable[str]
    ) -> Set[str]:
        """Return the subset of the given IDs that belong to stored nodes."""
        wanted = sorted(set(node_ids))
        if not wanted:
            return set()
        placeholders = ", ".join("?" for _ in wanted)
        rows = conn.execute(
            f"SELECT id FROM nodes WHERE id IN ({placeholders})",
            tuple(wanted),
        ).fetchall()
        return {row[0] for row in rows}

    def update(
        self, conn: duckdb.DuckDBPyConnection, node_id: str, patch: NodePatch
    ) -> Node:
        """
        Apply a partial update to a node.

        Args:
            conn: Cursor of the current transaction
            node_id: Node ID
            patch: Allow-listed fields to change

        Returns:
            Updated node

        Raises:
            ValidationError: If the update would break a node invariant
            NotFoundError: If no node has this ID
        """
        changes = validate_node_patch(patch).unwrap().changes()

        if not changes:
            return self.get(conn, node_id)

        updates = []
        params: List[Any] = []

        for field, value in changes.items():
            updates.append(f'"{field}" = ?')
            params.append(dump_properties(value) if field == "properties" else value)

        updates.append("updated_at = ?")
        params.append(utcnow())
        params.append(node_id)

        row = conn.execute(
            f"UPDATE nodes SET {', '.join(updates)} WHERE id = ? RETURNING {NODE_COLUMNS}",
            tuple(params),
        ).fetchone()

        if row is None:
            raise NotFoundError("Node not found", entity="node", entity_id=node_id)

        logger.info(f"Updated node: {node_id} ({', '.join(sorted(changes))})")
        return _row_to_node(row)

    def delete(self, conn: duckdb.DuckDBPyConnection, node_id: str) -> None:
        """
        Delete node by ID.

        Connected edges are not touched here; see
        ``GraphMutationService.delete_node``.

        Raises:
            NotFoundError: If no node has this ID
        """
        row = conn.execute(
            "DELETE FROM nodes WHERE id = ? RETURNING id",
            (node_id,),
        ).fetchone()

        if row is None:
            raise NotFoundError("Node not found", entity="node", entity_id=node_id)

        logger.info(f"Deleted node: {node_id}")

    def delete_all(self, conn: duckdb.DuckDBPyConnection) -> int:
        """Delete every node. Returns the number removed."""
        rows = conn.execute("DELETE FROM nodes RETURNING id").fetchall()
        return len(rows)

    def search(
        self,
        conn: duckdb.DuckDBPyConnection,
        query: str,
        limit: int = SEARCH_RESULT_LIMIT,
    ) -> List[Node]:
        """
        Case-insensitive substring search over label and type.

        The query is matched literally; no pattern characters are interpreted.

        Args:
            conn: Cursor of the current unit of work
            query: Non-empty search text
            limit: Maximum number of results

        Returns:
            Matching nodes in insertion order
        """
        # Both sides are case-folded by DuckDB so non-ASCII folding agrees
        rows = conn.execute(
            f"""
            SELECT {NODE_COLUMNS}
            FROM nodes
            WHERE contains(lower(label), lower(?)) OR contains(lower("type"), lower(?))
            ORDER BY seq
            LIMIT ?
            """,
            (query, query, limit),
        ).fetchall()
        return [_row_to_node(row) for row in rows]

    def count(self, conn: duckdb.DuckDBPyConnection) -> int:
        """Get total node count."""
        result = conn.execute("SELECT COUNT(*) FROM nodes").fetchone()
        return result[0] if result else 0
