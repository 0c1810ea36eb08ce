"""API routers for Graph Canvas."""

from __future__ import annotations

from . import edges, graph, health, nodes, search

__all__ = [
    "edges",
    "graph",
    "health",
    "nodes",
    "search",
]
