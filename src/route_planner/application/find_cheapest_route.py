"""
FindCheapestRoute Use Case - Public API for route planning.

This module provides the main entry point for the layover router.
It acts as a Facade/Factory, handling dependency initialization and
providing a clean interface for consumers.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.astar.models import Location
from src.route_planner.adapters.algorithms.astar_adapter import AStarPathFinder
from src.route_planner.adapters.data_providers.openflights_provider import (
    OpenFlightsDataProvider,
)
from src.route_planner.adapters.repositories.route_graph_repo import (
    InMemoryRouteGraphCache,
    RouteGraphRepository,
)
from src.route_planner.config import RouterSettings
from src.route_planner.ports.airport_data_provider import AirportDataProvider
from src.route_planner.ports.path_finder import PathFinder
from src.route_planner.schemas.route import RouteResult
from src.route_planner.services.route_finder_service import RouteFinderService

logger = logging.getLogger(__name__)


class FindCheapestRoute:
    """
    Public API for finding the cheapest route between two airports.

    Example usage:
        >>> router = FindCheapestRoute()
        >>> route = router.search("TLL", "LHR")
        >>> if route:
        ...     print(f"Route: {route.route_codes}, Distance: {route.distance}")

    Attributes:
        _settings: Process-wide router settings.
        _service: Underlying RouteFinderService.
        _graph_repo: Route graph repository.
    """

    def __init__(
        self,
        settings: Optional[RouterSettings] = None,
        data_provider: Optional[AirportDataProvider] = None,
        path_finder: Optional[PathFinder] = None,
    ) -> None:
        """
        Initialize the router with optional custom dependencies.

        Args:
            settings: Router settings. If None, read from the environment.
            data_provider: Custom data provider. If None, uses
                OpenFlightsDataProvider on ``settings.data_dir``.
            path_finder: Custom algorithm. If None, uses AStarPathFinder
                configured from ``settings``.
        """
        self._settings = settings if settings is not None else RouterSettings.from_env()

        if data_provider is not None:
            self._data_provider = data_provider
        else:
            self._data_provider = OpenFlightsDataProvider(self._settings.data_dir)

        self._cache = InMemoryRouteGraphCache()
        self._graph_repo = RouteGraphRepository(
            data_provider=self._data_provider,
            cache=self._cache,
            ground_hop_threshold_km=self._settings.ground_hop_threshold_km,
        )

        if path_finder is not None:
            self._path_finder = path_finder
        else:
            self._path_finder = AStarPathFinder(
                max_layovers=self._settings.max_layovers,
                keying=self._settings.state_keying,
                max_expansions=self._settings.max_expansions,
                deadline_seconds=self._settings.deadline_seconds,
            )

        self._service = RouteFinderService(
            graph_repo=self._graph_repo,
            path_finder=self._path_finder,
        )

        logger.info(
            "FindCheapestRoute initialized with %s algorithm (max_layovers=%d, ground hops <= %.1f km)",
            self._path_finder.name,
            self._settings.max_layovers,
            self._settings.ground_hop_threshold_km,
        )

    def search(self, source: str, destination: str) -> Optional[RouteResult]:
        """
        Search for the cheapest route between two airport codes.

        Args:
            source: Source IATA or ICAO code (e.g., 'TLL').
            destination: Destination IATA or ICAO code.

        Returns:
            RouteResult, or None when no route exists within the layover cap.
        """
        return self._service.find_route(source, destination)

    def get_airport(self, code: str) -> Location:
        """Look up an airport by IATA or ICAO code."""
        return self._service.get_airport(code)

    def warm_up(self) -> None:
        """Build the route graph now instead of on the first search."""
        self._graph_repo.get_graph()

    @property
    def settings(self) -> RouterSettings:
        return self._settings

    @property
    def is_ready(self) -> bool:
        """Check if the router is ready to handle requests."""
        return self._service.is_ready

    @property
    def algorithm_name(self) -> str:
        """Get the name of the routing algorithm being used."""
        return self._service.algorithm_name

    def shutdown(self) -> None:
        """Release the cached route graph."""
        self._graph_repo.invalidate()
        logger.info("FindCheapestRoute shutdown complete")

    def __enter__(self) -> "FindCheapestRoute":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit with cleanup."""
        self.shutdown()
