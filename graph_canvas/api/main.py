"""
Graph Canvas API.

FastAPI application serving the node/edge CRUD, whole-graph and search
endpoints on top of a DuckDB graph store.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .. import __version__
from ..config.settings import Settings, get_settings
from ..services.graph_query_service import GraphQueryService
from ..services.mutation_service import GraphMutationService
from ..storage.duckdb_client import DuckDBClient
from ..storage.edge_store import EdgeStore
from ..storage.node_store import NodeStore
from ..utils.logging_config import setup_logging
from .dependencies import AppState
from .middleware import setup_cors, setup_error_handlers
from .routers import edges, graph, health, nodes, search

logger = logging.getLogger(__name__)


def build_state(settings: Settings, db: DuckDBClient) -> AppState:
    """Wire the services around an initialized store handle."""
    node_store = NodeStore()
    edge_store = EdgeStore()
    return AppState(
        settings=settings,
        db=db,
        query_service=GraphQueryService(db, nodes=node_store, edges=edge_store),
        mutation_service=GraphMutationService(db, nodes=node_store, edges=edge_store),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use (default: cached environment settings).

    Returns:
        Configured FastAPI application. The graph store is opened when the
        lifespan starts and closed when it ends.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the graph store on startup and close it on shutdown.

        Args:
            app: FastAPI application instance.

        Yields:
            None during application runtime.
        """
        logger.info(f"Starting {settings.app_name} ({settings.environment})...")

        db = DuckDBClient(settings.database.path)
        db.initialize()
        app.state.graph = build_state(settings, db)
        logger.info(f"Graph store ready at {settings.database.path}")

        try:
            yield
        finally:
            logger.info("Shutting down gracefully...")
            app.state.graph = None
            db.close()
            logger.info("Shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="CRUD, whole-graph and search API for a force-graph editor",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    setup_cors(app, settings.api.allowed_origins)
    setup_error_handlers(app)

    app.include_router(health.router)
    app.include_router(graph.router)
    app.include_router(nodes.router)
    app.include_router(edges.router)
    app.include_router(search.router)

    return app


def run() -> None:
    """Console entry point: configure logging and serve the API with uvicorn."""
    settings = get_settings()
    setup_logging(level=settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
