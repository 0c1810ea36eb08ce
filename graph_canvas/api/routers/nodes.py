"""Node CRUD endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ...services.graph_query_service import GraphQueryService
from ...services.mutation_service import GraphMutationService
from ..dependencies import get_mutation_service, get_query_service
from ..models.graph import (
    DeleteResponse,
    NodeCreateRequest,
    NodeResponse,
    NodeUpdateRequest,
)

router = APIRouter(prefix="/nodes", tags=["nodes"])


@router.post("", response_model=NodeResponse, status_code=201)
async def create_node(
    request: NodeCreateRequest,
    service: GraphMutationService = Depends(get_mutation_service),
) -> NodeResponse:
    """Create a node.

    Unset fields default to type "default", empty properties and
    coordinates (0, 0).

    Args:
        request: Node fields; ``label`` is required.

    Returns:
        The created node with its assigned ID.
    """
    return await service.create_node(request)


@router.get("/{node_id}", response_model=NodeResponse)
async def get_node(
    node_id: str,
    service: GraphQueryService = Depends(get_query_service),
) -> NodeResponse:
    """Get a node by ID."""
    return service.get_node(node_id)


@router.put("/{node_id}", response_model=NodeResponse)
async def update_node(
    node_id: str,
    request: Optional[NodeUpdateRequest] = None,
    service: GraphMutationService = Depends(get_mutation_service),
) -> NodeResponse:
    """Update a node.

    Only label, type, properties, x, y, fx and fy can change; any other
    field in the body is ignored. A missing body changes nothing.

    Args:
        node_id: ID of the node to update.
        request: Fields to change (optional).

    Returns:
        The updated node.
    """
    if request is None:
        request = NodeUpdateRequest()
    return await service.update_node(node_id, request)


@router.delete("/{node_id}", response_model=DeleteResponse)
async def delete_node(
    node_id: str,
    service: GraphMutationService = Depends(get_mutation_service),
) -> DeleteResponse:
    """Delete a node and every edge connected to it.

    Args:
        node_id: ID of the node to delete.

    Returns:
        Confirmation message and the number of edges removed.
    """
    removed_edges = await service.delete_node(node_id)
    return DeleteResponse(
        message="Node and connected edges deleted successfully",
        deleted_edges=removed_edges,
    )
