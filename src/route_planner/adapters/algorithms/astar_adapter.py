"""
A* Algorithm Adapter - Bridge between architecture and algorithm.

Wraps the astar search module and converts its id-based PathFound output
into code-based RouteResult schema objects.
"""

import logging
from typing import Optional

from src.astar.models import PathFound
from src.astar.search import DEFAULT_MAX_LAYOVERS, StateKeying, find_path
from src.route_planner.adapters.repositories.route_graph_repo import CachedRouteGraph
from src.route_planner.ports.path_finder import PathFinder
from src.route_planner.schemas.route import RouteHop, RouteResult

logger = logging.getLogger(__name__)


class AStarPathFinder(PathFinder):
    """
    Adapter for the layover-bounded A* search.

    The search itself is pure; every call gets fresh bookkeeping, so one
    adapter instance can serve concurrent requests against the shared graph.

    Attributes:
        _max_layovers: Cap on direct-connection legs.
        _keying: State keying strategy passed to the search.
        _max_expansions: Optional per-query expansion budget.
        _deadline_seconds: Optional per-query wall-clock budget.
    """

    def __init__(
        self,
        max_layovers: int = DEFAULT_MAX_LAYOVERS,
        keying: StateKeying = StateKeying.COMPOSITE,
        max_expansions: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
    ) -> None:
        self._max_layovers = max_layovers
        self._keying = StateKeying(keying)
        self._max_expansions = max_expansions
        self._deadline_seconds = deadline_seconds

    @property
    def name(self) -> str:
        """Algorithm identifier."""
        return "Layover-Bounded A*"

    @property
    def max_layovers(self) -> int:
        return self._max_layovers

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
            RouteResult with airport codes, or None when no route exists.

        Raises:
            ValidationError: If the ids or the layover cap are invalid.
            SearchBudgetExceededError: If a configured budget runs out.
        """
        result = find_path(
            graph.graph,
            source_id,
            destination_id,
            max_layovers=self._max_layovers,
            keying=self._keying,
            max_expansions=self._max_expansions,
            deadline_seconds=self._deadline_seconds,
        )

        if not isinstance(result, PathFound):
            logger.debug("No route from %s to %s", source_id, destination_id)
            return None

        return self._to_route_result(graph, result)

    def _to_route_result(self, graph: CachedRouteGraph, found: PathFound) -> RouteResult:
        """Convert an id-based PathFound to a code-based RouteResult."""
        hops = [
            RouteHop(
                hop_index=index,
                source_id=hop.source_id,
                destination_id=hop.destination_id,
                source=graph.display_code(hop.source_id),
                destination=graph.display_code(hop.destination_id),
                distance=hop.distance,
                is_ground_hop=hop.is_ground_hop,
            )
            for index, hop in enumerate(found.hops)
        ]

        return RouteResult.from_hops(
            source=graph.display_code(found.start),
            destination=graph.display_code(found.goal),
            hops=hops,
        )
