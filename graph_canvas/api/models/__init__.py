"""API request and response models."""

from __future__ import annotations

from .error import ErrorResponse
from .graph import (
    DeleteResponse,
    EdgeCreateRequest,
    EdgeResponse,
    EdgeUpdateRequest,
    GraphResponse,
    NodeCreateRequest,
    NodeResponse,
    NodeUpdateRequest,
)
from .health import HealthResponse

__all__ = [
    "DeleteResponse",
    "EdgeCreateRequest",
    "EdgeResponse",
    "EdgeUpdateRequest",
    "ErrorResponse",
    "GraphResponse",
    "HealthResponse",
    "NodeCreateRequest",
    "NodeResponse",
    "NodeUpdateRequest",
]
