"""Graph services: query (read) and mutation (write)."""

from .graph_query_service import GraphQueryService
from .mutation_service import GraphMutationService

__all__ = [
    "GraphMutationService",
    "GraphQueryService",
]
