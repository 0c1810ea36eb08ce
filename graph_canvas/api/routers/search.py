"""Node search endpoint."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...services.graph_query_service import GraphQueryService
from ..dependencies import get_query_service
from ..models.graph import NodeResponse

router = APIRouter(tags=["search"])


@router.get("/search", response_model=List[NodeResponse])
async def search_nodes(
    q: Optional[List[str]] = Query(default=None, description="Text to find in node label or type"),
    service: GraphQueryService = Depends(get_query_service),
) -> List[NodeResponse]:
    """Search nodes by label or type.

    Case-insensitive substring match, at most 20 results. A blank query
    returns an empty list; a missing or repeated ``q`` is rejected.

    Args:
        q: Search text.

    Returns:
        Matching nodes.
    """
    return service.search_nodes(q)
