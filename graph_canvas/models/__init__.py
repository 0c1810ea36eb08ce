"""Graph domain models."""

from __future__ import annotations

from .graph import Edge, EdgeDraft, EdgePatch, Graph, Node, NodeDraft, NodePatch

__all__ = [
    "Edge",
    "EdgeDraft",
    "EdgePatch",
    "Graph",
    "Node",
    "NodeDraft",
    "NodePatch",
]
