"""Edge CRUD endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ...services.graph_query_service import GraphQueryService
from ...services.mutation_service import GraphMutationService
from ..dependencies import get_mutation_service, get_query_service
from ..models.graph import (
    DeleteResponse,
    EdgeCreateRequest,
    EdgeResponse,
    EdgeUpdateRequest,
)

router = APIRouter(prefix="/edges", tags=["edges"])


@router.post("", response_model=EdgeResponse, status_code=201)
async def create_edge(
    request: EdgeCreateRequest,
    service: GraphMutationService = Depends(get_mutation_service),
) -> EdgeResponse:
    """Create an edge between two existing nodes.

    Args:
        request: Source and target node IDs plus optional label,
            properties and directed flag.

    Returns:
        The created edge with its assigned ID.
    """
    return await service.create_edge(request)


@router.get("/{edge_id}", response_model=EdgeResponse)
async def get_edge(
    edge_id: str,
    service: GraphQueryService = Depends(get_query_service),
) -> EdgeResponse:
    """Get an edge by ID."""
    return service.get_edge(edge_id)


@router.put("/{edge_id}", response_model=EdgeResponse)
async def update_edge(
    edge_id: str,
    request: Optional[EdgeUpdateRequest] = None,
    service: GraphMutationService = Depends(get_mutation_service),
) -> EdgeResponse:
    """Update an edge's label, properties or directed flag. A missing body changes nothing."""
    if request is None:
        request = EdgeUpdateRequest()
    return await service.update_edge(edge_id, request)


@router.delete("/{edge_id}", response_model=DeleteResponse, response_model_exclude_none=True)
async def delete_edge(
    edge_id: str,
    service: GraphMutationService = Depends(get_mutation_service),
) -> DeleteResponse:
    """Delete an edge."""
    await service.delete_edge(edge_id)
    return DeleteResponse(message="Edge deleted successfully")
