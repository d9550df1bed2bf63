"""
Shared fixtures for performance benchmarks.

Key design principle: build expensive resources (graphs) once at module
scope, then benchmark only the hot paths.
"""

from pathlib import Path
from typing import List, Tuple

import numpy as np
import pytest

from src.astar.distance import haversine_km_vectorized
from src.astar.graph import RouteGraph, build_graph
from src.astar.models import Connection, Location
from src.route_planner.adapters.data_providers.openflights_provider import (
    OpenFlightsDataProvider,
)
from src.route_planner.adapters.repositories.route_graph_repo import (
    CachedRouteGraph,
    InMemoryRouteGraphCache,
    RouteGraphRepository,
)

FIXTURE_DATA_DIR = Path(__file__).parent.parent / "data" / "openflights"


# =============================================================================
# SYNTHETIC DATA GENERATORS (for scaling tests)
# =============================================================================


def generate_synthetic_network(
    num_airports: int,
    routes_per_airport: int = 8,
    seed: int = 42,
) -> Tuple[List[Location], List[Connection]]:
    """
    Generate a synthetic airport network for scaling benchmarks.

    Airports are scattered over Europe-sized bounds so that a realistic
    share of pairs fall within ground-hop distance.

    Args:
        num_airports: Number of airports.
        routes_per_airport: Outgoing direct connections per airport.
        seed: Random seed for reproducibility.

    Returns:
        (locations, connections) with great-circle connection distances.
    """
    rng = np.random.default_rng(seed)

    lats = rng.uniform(36.0, 70.0, size=num_airports)
    lons = rng.uniform(-10.0, 40.0, size=num_airports)
    locations = [
        Location(id=i, latitude=float(lats[i]), longitude=float(lons[i]))
        for i in range(num_airports)
    ]

    sources = np.repeat(np.arange(num_airports), routes_per_airport)
    targets = rng.integers(0, num_airports, size=sources.size)

    # Ensure no self-loops
    mask = sources == targets
    while mask.any():
        targets[mask] = rng.integers(0, num_airports, size=mask.sum())
        mask = sources == targets

    distances = haversine_km_vectorized(lats[sources], lons[sources], lats[targets], lons[targets])
    connections = [
        Connection(int(s), int(t), float(d)) for s, t, d in zip(sources, targets, distances)
    ]
    return locations, connections


@pytest.fixture(scope="module")
def synthetic_network_1k() -> Tuple[List[Location], List[Connection]]:
    """1,000 airports, 8,000 connections."""
    return generate_synthetic_network(1_000)


@pytest.fixture(scope="module")
def synthetic_network_3k() -> Tuple[List[Location], List[Connection]]:
    """3,000 airports, 24,000 connections."""
    return generate_synthetic_network(3_000)


@pytest.fixture(scope="module")
def synthetic_graph_1k(synthetic_network_1k) -> RouteGraph:
    """Pre-built graph over the 1k network (module-scoped)."""
    locations, connections = synthetic_network_1k
    return build_graph(locations, connections)


# =============================================================================
# FIXTURE DATASET
# =============================================================================


@pytest.fixture(scope="module")
def preloaded_repo() -> RouteGraphRepository:
    """
    RouteGraphRepository with the fixture dataset already loaded.

    The cold start (CSV read + graph build) happens once here.
    """
    repo = RouteGraphRepository(OpenFlightsDataProvider(FIXTURE_DATA_DIR), InMemoryRouteGraphCache())
    repo.get_graph()
    return repo


@pytest.fixture(scope="module")
def preloaded_graph(preloaded_repo: RouteGraphRepository) -> CachedRouteGraph:
    return preloaded_repo.get_graph()
