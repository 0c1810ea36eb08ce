"""
Demo data loader.

Clears the graph store and fills it with a small technology-stack graph.
Edges name their endpoints by label; an edge whose label is unknown is
skipped with a warning.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config.settings import get_settings
from .models.graph import EdgeDraft, NodeDraft
from .services.graph_query_service import GraphQueryService
from .services.mutation_service import GraphMutationService
from .storage.duckdb_client import DuckDBClient
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedNode:
    label: str
    type: str
    description: str
    category: str
    x: float
    y: float


@dataclass(frozen=True)
class SeedEdge:
    source_label: str
    target_label: str
    label: str
    directed: bool = True
    properties: Dict[str, Any] = field(default_factory=dict)


SEED_NODES: List[SeedNode] = [
    SeedNode("React", "frontend-framework", "JavaScript library for building user interfaces", "Frontend", -200, -100),
    SeedNode("TypeScript", "programming-language", "Typed superset of JavaScript", "Language", 0, -200),
    SeedNode("Node.js", "runtime", "JavaScript runtime built on Chrome V8 engine", "Backend", 200, -100),
    SeedNode("Express", "backend-framework", "Fast, unopinionated web framework for Node.js", "Backend", 300, 0),
    SeedNode("MongoDB", "database", "Document-oriented NoSQL database", "Database", 200, 100),
    SeedNode("Mongoose", "orm", "MongoDB object modeling for Node.js", "Database", 100, 150),
    SeedNode("D3.js", "visualization-library", "Data-driven documents library for visualization", "Frontend", -300, 0),
    SeedNode("Force Graph", "component", "Physics-based graph visualization component", "Frontend", -250, 100),
    SeedNode("REST API", "architecture", "Representational State Transfer architecture", "Architecture", 0, 0),
    SeedNode("Graph Database", "concept", "Database that uses graph structures for queries", "Database", 0, 200),
    SeedNode("Tailwind CSS", "css-framework", "Utility-first CSS framework", "Frontend", -100, -150),
    SeedNode("Vite", "build-tool", "Fast build tool for modern web development", "Frontend", 100, -50),
    SeedNode("Neo4j", "graph-database", "Native graph database management system", "Database", -100, 250),
    SeedNode("MongoDB Atlas", "cloud-database", "Cloud-hosted MongoDB database service", "Database", 300, 150),
]

SEED_EDGES: List[SeedEdge] = [
    SeedEdge("React", "TypeScript", "uses"),
    SeedEdge("Node.js", "TypeScript", "supports"),
    SeedEdge("Express", "Node.js", "runs-on"),
    SeedEdge("Mongoose", "MongoDB", "connects-to"),
    SeedEdge("Express", "Mongoose", "uses"),
    SeedEdge("Force Graph", "D3.js", "built-with"),
    SeedEdge("React", "Force Graph", "renders"),
    SeedEdge("Express", "REST API", "implements"),
    SeedEdge("MongoDB", "Graph Database", "can-model"),
    SeedEdge("React", "Tailwind CSS", "styled-with"),
    SeedEdge("React", "Vite", "built-with"),
    SeedEdge("MongoDB", "MongoDB Atlas", "hosted-on"),
    SeedEdge("Neo4j", "Graph Database", "is-type-of"),
    SeedEdge("Force Graph", "Neo4j", "inspired-by", directed=False),
    SeedEdge("REST API", "TypeScript", "typed-with"),
    SeedEdge("Vite", "TypeScript", "supports"),
]


async def seed_graph(
    db: DuckDBClient,
    nodes: Optional[List[SeedNode]] = None,
    edges: Optional[List[SeedEdge]] = None,
) -> Dict[str, int]:
    """
    Replace the store contents with the seed graph.

    Args:
        db: Initialized store handle
        nodes: Nodes to insert (default: SEED_NODES)
        edges: Edges to insert (default: SEED_EDGES)

    Returns:
        Final node and edge counts plus the number of skipped edges
    """
    nodes = SEED_NODES if nodes is None else nodes
    edges = SEED_EDGES if edges is None else edges
    mutations = GraphMutationService(db)

    logger.info("Clearing existing data...")
    await mutations.clear_graph()

    logger.info("Creating nodes...")
    ids_by_label: Dict[str, str] = {}
    for seed in nodes:
        node = await mutations.create_node(
            NodeDraft(
                label=seed.label,
                type=seed.type,
                properties={"description": seed.description, "category": seed.category},
                x=seed.x,
                y=seed.y,
            )
        )
        ids_by_label[seed.label] = node.id
        logger.info(f"  Created node: {seed.label} ({seed.type})")

    logger.info("Creating edges...")
    skipped = 0
    for seed in edges:
        source_id = ids_by_label.get(seed.source_label)
        target_id = ids_by_label.get(seed.target_label)
        if not source_id or not target_id:
            logger.warning(
                f"  Skipping edge: {seed.source_label} -> {seed.target_label} (node not found)"
            )
            skipped += 1
            continue

        await mutations.create_edge(
            EdgeDraft(
                source=source_id,
                target=target_id,
                label=seed.label,
                properties=dict(seed.properties),
                directed=seed.directed,
            )
        )
        logger.info(f"  Created edge: {seed.source_label} --[{seed.label}]--> {seed.target_label}")

    counts = GraphQueryService(db).stats()
    counts["skipped_edges"] = skipped
    return counts


def main(argv: Optional[List[str]] = None) -> int:
    """Seed the configured graph store. Returns a process exit code."""
    parser = argparse.ArgumentParser(description="Load the demo technology-stack graph")
    parser.add_argument(
        "--db-path",
        default=None,
        help="DuckDB path (default: GRAPH_DB_PATH or data/graph.duckdb)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(level=settings.log_level, include_request_id=False)
    db_path = args.db_path or settings.database.path

    logger.info(f"Seeding graph store at {db_path}")
    db = DuckDBClient(db_path)
    try:
        db.initialize()
        counts = asyncio.run(seed_graph(db))
    except Exception as e:
        logger.error(f"Error seeding database: {e}", exc_info=True)
        return 1
    finally:
        db.close()

    logger.info(
        f"Seeding completed: {counts['nodes']} nodes and {counts['edges']} edges"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
