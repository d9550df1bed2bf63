"""
Route Finder Service - Domain orchestrator for route planning.

Coordinates the interaction between:
- RouteGraphRepository (cached route graph)
- PathFinder (algorithm adapter)
- RouteQuery (normalized search parameters)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

from src.astar.models import Location
from src.route_planner.exceptions import SameAirportError, UnknownAirportCodeError
from src.route_planner.schemas.constraints import RouteQuery
from src.route_planner.schemas.route import RouteResult

if TYPE_CHECKING:
    from src.route_planner.adapters.repositories.route_graph_repo import (
        CachedRouteGraph,
        RouteGraphRepository,
    )
    from src.route_planner.ports.path_finder import PathFinder

logger = logging.getLogger(__name__)


class RouteFinderService:
    """
    Domain service for finding the cheapest route between two airports.

    Orchestrates the routing process:
    1. Normalizes the airport codes
    2. Retrieves the cached route graph
    3. Resolves codes to airport ids
    4. Delegates the search to the algorithm adapter

    This service is stateless and thread-safe.

    Attributes:
        _graph_repo: Repository providing the cached route graph.
        _path_finder: Algorithm adapter for route finding.
    """

    def __init__(
        self,
        graph_repo: RouteGraphRepository,
        path_finder: PathFinder,
    ) -> None:
        self._graph_repo = graph_repo
        self._path_finder = path_finder

    def find_route(self, source: str, destination: str) -> Optional[RouteResult]:
        """
        Find the cheapest route between two airport codes.

        Args:
            source: Source IATA or ICAO code (case-insensitive).
            destination: Destination IATA or ICAO code.

        Returns:
            RouteResult, or None when no route satisfies the constraints.

        Raises:
            ValueError: If a code is empty.
            UnknownAirportCodeError: If a code matches no airport.
            SameAirportError: If both codes resolve to the same airport.
            GraphNotInitializedError: If the graph cannot be loaded.
            SearchBudgetExceededError: If the search budget runs out.
        """
        start_time = time.perf_counter()

        # 1. Normalize
        query = RouteQuery.create(source=source, destination=destination)

        # 2. Cached graph
        graph = self._graph_repo.get_graph()

        # 3. Resolve codes
        source_id = self._resolve(graph, query.source)
        destination_id = self._resolve(graph, query.destination)
        if source_id == destination_id:
            raise SameAirportError(query.source, query.destination)

        # 4. Search
        algo_start = time.perf_counter()
        result = self._path_finder.find_route(
            graph=graph,
            source_id=source_id,
            destination_id=destination_id,
        )
        algo_time = time.perf_counter() - algo_start
        total_time = time.perf_counter() - start_time

        logger.info(
            "Route search %s -> %s completed: %s in %.3fms (algo: %.3fms)",
            query.source,
            query.destination,
            f"{result.distance} km via {len(result.hops)} hops" if result else "no route",
            total_time * 1000,
            algo_time * 1000,
        )
        return result

    def get_airport(self, code: str) -> Location:
        """
        Look up an airport by IATA or ICAO code.

        Raises:
            UnknownAirportCodeError: If the code matches no airport.
        """
        graph = self._graph_repo.get_graph()
        normalized = (code or "").strip().upper()
        return graph.get_location(self._resolve(graph, normalized))

    @staticmethod
    def _resolve(graph: CachedRouteGraph, code: str) -> int:
        location_id = graph.resolve_code(code)
        if location_id is None:
            raise UnknownAirportCodeError(code)
        return location_id

    @property
    def algorithm_name(self) -> str:
        """Get name of the underlying algorithm."""
        return self._path_finder.name

    @property
    def is_ready(self) -> bool:
        """Check if service is ready to handle requests."""
        return self._graph_repo.is_initialized
