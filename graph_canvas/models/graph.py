"""Graph domain models: stored entities, creation drafts and partial updates."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..utils.constants import (
    DEFAULT_COORDINATE,
    DEFAULT_EDGE_DIRECTED,
    DEFAULT_EDGE_LABEL,
    DEFAULT_NODE_TYPE,
)
from ..utils.types import Properties


class Node(BaseModel):
    """A stored graph vertex."""

    id: str = Field(..., description="Node identifier")
    label: str = Field(..., description="Display label")
    type: str = Field(default=DEFAULT_NODE_TYPE, description="Node category")
    properties: Properties = Field(default_factory=dict)
    x: float = DEFAULT_COORDINATE
    y: float = DEFAULT_COORDINATE
    fx: Optional[float] = Field(default=None, description="Pinned x coordinate")
    fy: Optional[float] = Field(default=None, description="Pinned y coordinate")
    created_at: datetime
    updated_at: datetime


class Edge(BaseModel):
    """A stored connection between two nodes."""

    id: str = Field(..., description="Edge identifier")
    source: str = Field(..., description="Source node identifier")
    target: str = Field(..., description="Target node identifier")
    label: str = DEFAULT_EDGE_LABEL
    properties: Properties = Field(default_factory=dict)
    directed: bool = DEFAULT_EDGE_DIRECTED
    created_at: datetime
    updated_at: datetime


class Graph(BaseModel):
    """All nodes and edges, read from one snapshot."""

    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)


class NodeDraft(BaseModel):
    """Fields accepted when creating a node."""

    model_config = ConfigDict(extra="ignore")

    label: Optional[str] = None
    type: str = DEFAULT_NODE_TYPE
    properties: Properties = Field(default_factory=dict)
    x: float = DEFAULT_COORDINATE
    y: float = DEFAULT_COORDINATE
    fx: Optional[float] = None
    fy: Optional[float] = None


class NodePatch(BaseModel):
    """Partial update of a node.

    Only the fields declared here can change; anything else in the request
    body is dropped. Fields left unset keep their stored value, so an explicit
    ``null`` for ``fx``/``fy`` unpins the node.
    """

    model_config = ConfigDict(extra="ignore")

    label: Optional[str] = None
    type: Optional[str] = None
    properties: Optional[Properties] = None
    x: Optional[float] = None
    y: Optional[float] = None
    fx: Optional[float] = None
    fy: Optional[float] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the caller actually set."""
        return self.model_dump(exclude_unset=True)


class EdgeDraft(BaseModel):
    """Fields accepted when creating an edge."""

    model_config = ConfigDict(extra="ignore")

    source: Optional[str] = None
    target: Optional[str] = None
    label: str = DEFAULT_EDGE_LABEL
    properties: Properties = Field(default_factory=dict)
    directed: bool = DEFAULT_EDGE_DIRECTED


class EdgePatch(BaseModel):
    """Partial update of an edge (label, properties, directed)."""

    model_config = ConfigDict(extra="ignore")

    label: Optional[str] = None
    properties: Optional[Properties] = None
    directed: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields the caller actually set."""
        return self.model_dump(exclude_unset=True)
