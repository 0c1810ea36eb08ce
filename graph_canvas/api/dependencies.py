"""Application state and FastAPI dependencies for the routers."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request

from ..config.settings import Settings
from ..services.graph_query_service import GraphQueryService
from ..services.mutation_service import GraphMutationService
from ..storage.duckdb_client import DuckDBClient


@dataclass
class AppState:
    """Process-wide handles, created in the lifespan and stored on ``app.state``."""

    settings: Settings
    db: DuckDBClient
    query_service: GraphQueryService
    mutation_service: GraphMutationService


def get_app_state(request: Request) -> AppState:
    """Get application state from the running FastAPI app."""
    state = getattr(request.app.state, "graph", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Graph store not initialized")
    return state


def get_query_service(state: AppState = Depends(get_app_state)) -> GraphQueryService:
    return state.query_service


def get_mutation_service(state: AppState = Depends(get_app_state)) -> GraphMutationService:
    return state.mutation_service
