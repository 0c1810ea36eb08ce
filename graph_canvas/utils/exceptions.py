"""
Custom exception hierarchy for Graph Canvas.

This module defines all custom exceptions used throughout the application,
providing clear error categorization. The API layer is the only place that
turns these into HTTP status codes.
"""

from __future__ import annotations

from typing import Optional


class GraphCanvasError(Exception):
    """Base exception for all Graph Canvas errors."""

    pass


class ValidationError(GraphCanvasError):
    """Raised when request data is malformed or missing required fields."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(GraphCanvasError):
    """Raised when a referenced node or edge does not exist."""

    def __init__(
        self,
        message: str,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.entity_id = entity_id


class StoreError(GraphCanvasError):
    """Raised for unexpected persistence failures."""

    pass
