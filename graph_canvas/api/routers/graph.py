"""Whole-graph endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...services.graph_query_service import GraphQueryService
from ..dependencies import get_query_service
from ..models.graph import GraphResponse

router = APIRouter(tags=["graph"])


@router.get("/graph", response_model=GraphResponse)
async def get_graph(
    service: GraphQueryService = Depends(get_query_service),
) -> GraphResponse:
    """Get the entire graph.

    Returns:
        All nodes and all edges, read from one consistent snapshot.
    """
    return service.get_graph()
