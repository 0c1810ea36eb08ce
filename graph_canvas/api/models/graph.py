"""Graph request and response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ...models.graph import Edge, EdgeDraft, EdgePatch, Graph, Node, NodeDraft, NodePatch

# Request bodies
NodeCreateRequest = NodeDraft
NodeUpdateRequest = NodePatch
EdgeCreateRequest = EdgeDraft
EdgeUpdateRequest = EdgePatch

# Response bodies
NodeResponse = Node
EdgeResponse = Edge
GraphResponse = Graph


class DeleteResponse(BaseModel):
    """Response model for delete endpoints."""

    message: str
    deleted_edges: Optional[int] = Field(
        default=None, description="Edges removed together with a node"
    )
