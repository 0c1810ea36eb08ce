"""
Utility modules for Graph Canvas.

This package provides common utilities, exceptions, constants, type aliases,
identifier helpers and logging configuration used throughout the application.
Validators live in ``graph_canvas.utils.validators`` and are imported from
there directly, since they depend on the domain models.
"""

from __future__ import annotations

from .constants import (
    DEFAULT_DB_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_NODE_TYPE,
    MEMORY_DB_PATH,
    SEARCH_RESULT_LIMIT,
)
from .exceptions import (
    GraphCanvasError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .ids import is_valid_id, new_id, normalize_id
from .logging_config import RequestIDFilter, request_id_var, setup_logging
from .types import EdgeRow, NodeRow, Properties

__all__ = [
    # Constants
    "DEFAULT_DB_PATH",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_NODE_TYPE",
    "MEMORY_DB_PATH",
    "SEARCH_RESULT_LIMIT",
    # Exceptions
    "GraphCanvasError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    # Identifiers
    "is_valid_id",
    "new_id",
    "normalize_id",
    # Logging
    "RequestIDFilter",
    "request_id_var",
    "setup_logging",
    # Types
    "EdgeRow",
    "NodeRow",
    "Properties",
]
