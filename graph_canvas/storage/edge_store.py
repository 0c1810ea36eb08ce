"""
Edge storage layer.

CRUD operations for the edges table. Endpoint existence is not checked
here; the mutation service does that inside the same transaction as the
insert.
"""

import logging
from typing import Any, List, Optional

import duckdb

from ..models.graph import Edge, EdgeDraft, EdgePatch
from ..utils.exceptions import NotFoundError
from ..utils.ids import new_id
from ..utils.types import EdgeRow
from ..utils.validators import validate_edge_draft, validate_edge_patch
from .serialization import as_utc, dump_properties, load_properties, utcnow

logger = logging.getLogger(__name__)

EDGE_COLUMNS = "id, source, target, label, properties, directed, created_at, updated_at"


def _row_to_edge(row: EdgeRow) -> Edge:
    return Edge(
        id=row[0],
        source=row[1],
        target=row[2],
        label=row[3],
        properties=load_properties(row[4]),
        directed=row[5],
        created_at=as_utc(row[6]),
        updated_at=as_utc(row[7]),
    )


class EdgeStore:
    """CRUD operations for edges table."""

    def create(self, conn: duckdb.DuckDBPyConnection, draft: EdgeDraft) -> Edge:
        """
        Create a new edge.

        Args:
            conn: Cursor of the current transaction
            draft: Creation fields

        Returns:
            Created edge with assigned ID and timestamps

        Raises:
            ValidationError: If source or target is missing or malformed
        """
        valid = validate_edge_draft(draft).unwrap()
        edge_id = new_id()
        now = utcnow()

        row = conn.execute(
            f"""
            INSERT INTO edges (id, source, target, label, properties, directed, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING {EDGE_COLUMNS}
            """,
            (
                edge_id,
                valid.source,
                valid.target,
                valid.label,
                dump_properties(valid.properties),
                valid.directed,
                now,
                now,
            ),
        ).fetchone()

        logger.info(f"Created edge: {edge_id} ({valid.source} -> {valid.target})")
        return _row_to_edge(row)

    def find(self, conn: duckdb.DuckDBPyConnection, edge_id: str) -> Optional[Edge]:
        """Get edge by ID, or None if not found."""
        row = conn.execute(
            f"SELECT {EDGE_COLUMNS} FROM edges WHERE id = ?",
            (edge_id,),
        ).fetchone()
        return _row_to_edge(row) if row else None

    def get(self, conn: duckdb.DuckDBPyConnection, edge_id: str) -> Edge:
        """
        Get edge by ID.

        Raises:
            NotFoundError: If no edge has this ID
        """
        edge = self.find(conn, edge_id)
        if edge is None:
            raise NotFoundError("Edge not found", entity="edge", entity_id=edge_id)
        return edge

    def list_all(self, conn: duckdb.DuckDBPyConnection) -> List[Edge]:
        """List all edges in insertion order."""
        rows = conn.execute(f"SELECT {EDGE_COLUMNS} FROM edges ORDER BY seq").fetchall()
        return [_row_to_edge(row) for row in rows]

    def update(
        self, conn: duckdb.DuckDBPyConnection, edge_id: str, patch: EdgePatch
    ) -> Edge:
        """
        Apply a partial update to an edge.

        Only label, properties and directed can change.

        Raises:
            ValidationError: If a set field is null
            NotFoundError: If no edge has this ID
        """
        changes = validate_edge_patch(patch).unwrap().changes()

        if not changes:
            return self.get(conn, edge_id)

        updates = []
        params: List[Any] = []

        for field, value in changes.items():
            updates.append(f"{field} = ?")
            params.append(dump_properties(value) if field == "properties" else value)

        updates.append("updated_at = ?")
        params.append(utcnow())
        params.append(edge_id)

        row = conn.execute(
            f"UPDATE edges SET {', '.join(updates)} WHERE id = ? RETURNING {EDGE_COLUMNS}",
            tuple(params),
        ).fetchone()

        if row is None:
            raise NotFoundError("Edge not found", entity="edge", entity_id=edge_id)

        logger.info(f"Updated edge: {edge_id} ({', '.join(sorted(changes))})")
        return _row_to_edge(row)

    def delete(self, conn: duckdb.DuckDBPyConnection, edge_id: str) -> None:
        """
        Delete edge by ID.

        Raises:
            NotFoundError: If no edge has this ID
        """
        row = conn.execute(
            "DELETE FROM edges WHERE id = ? RETURNING id",
            (edge_id,),
        ).fetchone()

        if row is None:
            raise NotFoundError("Edge not found", entity="edge", entity_id=edge_id)

        logger.info(f"Deleted edge: {edge_id}")

    def delete_for_node(self, conn: duckdb.DuckDBPyConnection, node_id: str) -> int:
        """
        Delete every edge whose source or target is the given node.

        Only meant to run inside the cascading node delete.

        Returns:
            Number of edges removed (may be zero)
        """
        rows = conn.execute(
            "DELETE FROM edges WHERE source = ? OR target = ? RETURNING id",
            (node_id, node_id),
        ).fetchall()
        return len(rows)

    def delete_all(self, conn: duckdb.DuckDBPyConnection) -> int:
        """Delete every edge. Returns the number removed."""
        rows = conn.execute("DELETE FROM edges RETURNING id").fetchall()
        return len(rows)

    def count(self, conn: duckdb.DuckDBPyConnection) -> int:
        """Get total edge count."""
        result = conn.execute("SELECT COUNT(*) FROM edges").fetchone()
        return result[0] if result else 0
