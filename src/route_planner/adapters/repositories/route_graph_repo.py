"""
Route Graph Repository - Cached Graph Infrastructure.

Loads airports and connections once from a data provider, builds the
immutable route graph and serves it to every query:
- Code index for O(1) IATA/ICAO to airport id lookups
- Lock-protected in-memory cache
- Double-checked locking on cold start (one build, many readers)
"""

from __future__ import annotations

import hashlib
import logging
import math
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

import pandas as pd

from src.astar.graph import DEFAULT_GROUND_HOP_THRESHOLD_KM, RouteGraph, build_graph
from src.astar.models import Connection, Location

if TYPE_CHECKING:
    from src.route_planner.ports.airport_data_provider import AirportDataProvider

from src.route_planner.ports.graph_repository import GraphNotInitializedError

logger = logging.getLogger(__name__)


# =============================================================================
# CODE INDEX: O(1) IATA/ICAO lookup
# =============================================================================


def build_code_index(airports_df: pd.DataFrame) -> Dict[str, int]:
    """
    Map upper-cased IATA and ICAO codes to airport ids.

    IATA codes are indexed first, so when a code appears twice the first
    IATA owner wins. IATA (3 letters) and ICAO (4 letters) never collide.

    Args:
        airports_df: DataFrame with ``id``, ``iata`` and ``icao`` columns.

    Returns:
        Dict mapping code to airport id.

    Example:
        >>> df = pd.DataFrame({
        ...     'id': [415, 6110],
        ...     'iata': ['TLL', None],
        ...     'icao': ['EETN', 'EEEI'],
        ... })
        >>> build_code_index(df)
        {'TLL': 415, 'EETN': 415, 'EEEI': 6110}
    """
    index: Dict[str, int] = {}
    for column in ("iata", "icao"):
        codes = airports_df[column]
        mask = codes.notna()
        for code, airport_id in zip(codes[mask].astype(str).str.upper(), airports_df.loc[mask, "id"]):
            if code in index and index[code] != int(airport_id):
                logger.debug(
                    "Code %s already maps to airport %d, ignoring airport %d",
                    code, index[code], int(airport_id),
                )
                continue
            index[code] = int(airport_id)
    return index


def _optional_str(value: object) -> Optional[str]:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return str(value)


def locations_from_df(airports_df: pd.DataFrame) -> List[Location]:
    """Convert an AirportSchema DataFrame to Location objects."""
    return [
        Location(
            id=int(row.id),
            latitude=float(row.latitude),
            longitude=float(row.longitude),
            iata=_optional_str(row.iata),
            icao=_optional_str(row.icao),
            name=_optional_str(getattr(row, "name", None)),
            city=_optional_str(getattr(row, "city", None)),
            country=_optional_str(getattr(row, "country", None)),
        )
        for row in airports_df.itertuples(index=False)
    ]


def connections_from_df(connections_df: pd.DataFrame) -> List[Connection]:
    """Convert a ConnectionSchema DataFrame to Connection objects."""
    return [
        Connection(
            source_id=int(source),
            destination_id=int(destination),
            distance=float(distance),
        )
        for source, destination, distance in zip(
            connections_df["source_id"],
            connections_df["destination_id"],
            connections_df["distance"],
        )
    ]


# =============================================================================
# CACHED ROUTE GRAPH
# =============================================================================


@dataclass(frozen=True, eq=False)
class CachedRouteGraph:
    """
    Route graph plus the metadata needed to serve code-based queries.

    Attributes:
        graph: Immutable RouteGraph used by the search.
        code_index: Upper-cased IATA/ICAO code to airport id.
        built_at: Timestamp when graph was built.
        version: Hash of the source data.
        location_count: Number of airports in the graph.
        connection_count: Number of direct connections loaded.
    """

    graph: RouteGraph
    code_index: Mapping[str, int]
    built_at: datetime
    version: str
    location_count: int
    connection_count: int

    def resolve_code(self, code: str) -> Optional[int]:
        """Airport id for an IATA/ICAO code (case-insensitive), None if unknown."""
        if not code:
            return None
        return self.code_index.get(code.strip().upper())

    def get_location(self, location_id: int) -> Location:
        """
        Raises:
            KeyError: If the id is not in the graph.
        """
        return self.graph.locations[location_id]

    def display_code(self, location_id: int) -> str:
        """IATA code, falling back to ICAO, then to the raw id."""
        location = self.graph.locations.get(location_id)
        if location is None or location.code is None:
            return str(location_id)
        return location.code


# =============================================================================
# IN-MEMORY CACHE
# =============================================================================


class InMemoryRouteGraphCache:
    """
    In-process cache (per-worker).

    Each uvicorn worker holds its own copy of the graph. Thread-safe for
    concurrent access within a single process.

    Attributes:
        _graph: Currently cached graph (or None).
        _lock: Lock for thread-safe access.
    """

    def __init__(self) -> None:
        self._graph: Optional[CachedRouteGraph] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[CachedRouteGraph]:
        """Get cached graph or None if miss."""
        with self._lock:
            return self._graph

    def set(self, graph: CachedRouteGraph) -> None:
        """Store graph in cache."""
        with self._lock:
            self._graph = graph

    def clear(self) -> None:
        """Drop the cached graph."""
        with self._lock:
            self._graph = None


# =============================================================================
# ROUTE GRAPH REPOSITORY
# =============================================================================


class RouteGraphRepository:
    """
    Repository building the route graph once and serving it read-only.

    Usage:
        >>> provider = OpenFlightsDataProvider("data/openflights")
        >>> repo = RouteGraphRepository(provider, InMemoryRouteGraphCache())
        >>> graph = repo.get_graph()  # First call builds, later calls are O(1)
    """

    def __init__(
        self,
        data_provider: AirportDataProvider,
        cache: InMemoryRouteGraphCache,
        ground_hop_threshold_km: float = DEFAULT_GROUND_HOP_THRESHOLD_KM,
    ) -> None:
        """
        Initialize repository with data provider and cache.

        Args:
            data_provider: Source for airports and connections.
            cache: Cache backend (InMemoryRouteGraphCache or Protocol impl).
            ground_hop_threshold_km: Threshold baked into the built graph.
        """
        self._provider = data_provider
        self._cache = cache
        self._threshold_km = ground_hop_threshold_km
        self._build_lock = threading.Lock()

    def get_graph(self) -> CachedRouteGraph:
        """
        Get the route graph, building it on first access.

        The cold start blocks every caller until the single build finishes.

        Returns:
            Cached CachedRouteGraph.

        Raises:
            GraphNotInitializedError: If the cold start fails.
        """
        cached = self._cache.get()
        if cached is not None:
            return cached

        with self._build_lock:
            # Double-check after acquiring lock
            cached = self._cache.get()
            if cached is not None:
                return cached

            try:
                new_graph = self._build_graph()
            except Exception as e:
                logger.error("Cold start failed: %s", e)
                raise GraphNotInitializedError(
                    f"Failed to initialize route graph: {e}"
                ) from e

            self._cache.set(new_graph)

        logger.info(
            "Route graph loaded from %s: %d airports, %d connections",
            self._provider.name,
            new_graph.location_count,
            new_graph.connection_count,
        )
        return new_graph

    def _build_graph(self) -> CachedRouteGraph:
        """
        Build the route graph from the data provider.

        Steps:
        1. Fetch airports and connections
        2. Build code index
        3. Convert rows to domain objects and build the RouteGraph
        4. Compute version hash
        """
        start = time.perf_counter()

        # 1. Fetch data
        airports_df = self._provider.get_airports_df()
        connections_df = self._provider.get_connections_df()

        # 2. Code index
        code_index = build_code_index(airports_df)

        # 3. Graph
        graph = build_graph(
            locations_from_df(airports_df),
            connections_from_df(connections_df),
            ground_hop_threshold_km=self._threshold_km,
        )

        logger.debug("Graph build took %.3fms", (time.perf_counter() - start) * 1000)

        return CachedRouteGraph(
            graph=graph,
            code_index=MappingProxyType(code_index),
            built_at=datetime.now(),
            version=self._compute_version(airports_df, connections_df),
            location_count=len(airports_df),
            connection_count=len(connections_df),
        )

    def _compute_version(self, airports_df: pd.DataFrame, connections_df: pd.DataFrame) -> str:
        """Compute a short hash of the source data for version tracking."""
        content = f"{len(airports_df)}:{len(connections_df)}:{self._threshold_km}"
        if len(connections_df) > 0:
            # Include first and last row for change detection
            content += (
                f":{connections_df.iloc[0].to_dict()}:{connections_df.iloc[-1].to_dict()}"
            )
        return hashlib.md5(content.encode()).hexdigest()[:12]

    @property
    def is_initialized(self) -> bool:
        """Check if graph has been loaded."""
        return self._cache.get() is not None

    @property
    def current_version(self) -> Optional[str]:
        """Get version of currently cached graph."""
        graph = self._cache.get()
        return graph.version if graph else None

    def invalidate(self) -> None:
        """Release the cached graph; the next get_graph() rebuilds it."""
        self._cache.clear()
        logger.info("Route graph cache cleared")
