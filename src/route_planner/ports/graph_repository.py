"""
Graph Repository port interface.

Defines the caching protocol for route graphs. The graph is built once and
then served read-only for the process lifetime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import (
        CachedRouteGraph,
    )


class GraphNotInitializedError(Exception):
    """Raised when the graph cannot be built on first access."""

    pass


@runtime_checkable
class RouteGraphCache(Protocol):
    """
    Protocol for route graph caching.

    Implementations:
    - InMemoryRouteGraphCache: per-process, lock-protected

    All implementations must be thread-safe for concurrent access.
    """

    def get(self) -> Optional[CachedRouteGraph]:
        """
        Get cached graph or None if miss.
        """
        ...

    def set(self, graph: CachedRouteGraph) -> None:
        """
        Store graph in cache.

        Args:
            graph: The CachedRouteGraph to store.
        """
        ...

    def clear(self) -> None:
        """
        Drop the cached graph; the next get() is a miss.
        """
        ...
