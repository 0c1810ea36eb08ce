"""
Type aliases for Graph Canvas.

This module defines common type aliases used throughout the application
to improve code readability.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

# Free-form node/edge attributes
Properties = Dict[str, Any]

# Storage row types (column order of NODE_COLUMNS / EDGE_COLUMNS)
NodeRow = Tuple[Any, ...]
EdgeRow = Tuple[Any, ...]
