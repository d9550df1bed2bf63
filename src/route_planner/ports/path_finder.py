"""
Path Finder port interface.

Defines the abstract contract for routing algorithms.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import (
        CachedRouteGraph,
    )
    from src.route_planner.schemas.route import RouteResult


class PathFinder(ABC):
    """
    Abstract interface for path finding algorithms.

    Algorithm adapters receive the full CachedRouteGraph so they can use
    both the immutable route graph and the airport code metadata.

    Implementations:
    - AStarPathFinder: layover-bounded A* with ground hops
    """

    @abstractmethod
    def find_route(
        self,
        graph: CachedRouteGraph,
        source_id: int,
        destination_id: int,
    ) -> Optional[RouteResult]:
        """
        Find the cheapest route between two airports.

        Args:
            graph: Pre-built CachedRouteGraph.
            source_id: Source airport id.
            destination_id: Destination airport id.

        Returns:
            RouteResult, or None when no route satisfies the constraints.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Algorithm identifier.

        Returns:
            Human-readable algorithm name.
        """
        ...
