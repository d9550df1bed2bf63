"""
Shared fixtures.

Synthetic graphs place airports on the equator, where one degree of
longitude is ~111.2 km, so distances are easy to reason about.
"""

from pathlib import Path

import pytest

from src.astar.distance import haversine_km
from src.astar.graph import build_graph
from src.astar.models import Connection, Location

FIXTURE_DATA_DIR = Path(__file__).parent / "data" / "openflights"


@pytest.fixture
def openflights_dir() -> Path:
    """Directory with the OpenFlights-format fixture dataset."""
    return FIXTURE_DATA_DIR


@pytest.fixture
def make_location():
    """Factory for a location on the equator at the given longitude."""

    def _make(location_id, longitude, latitude=0.0, iata=None):
        return Location(id=location_id, latitude=latitude, longitude=longitude, iata=iata)

    return _make


@pytest.fixture
def make_graph():
    """
    Factory building a graph from ``{id: longitude}`` and connection tuples.

    Connections are ``(source, destination)`` (weight = great-circle
    distance) or ``(source, destination, weight)``.
    """

    def _make(positions, connections, threshold=100.0):
        locations = [
            Location(id=location_id, latitude=0.0, longitude=lon)
            for location_id, lon in positions.items()
        ]
        conns = []
        for conn in connections:
            source, destination = conn[0], conn[1]
            if len(conn) == 3:
                weight = conn[2]
            else:
                weight = haversine_km(0.0, positions[source], 0.0, positions[destination])
            conns.append(Connection(source, destination, weight))
        return build_graph(locations, conns, ground_hop_threshold_km=threshold)

    return _make


@pytest.fixture
def equator_km():
    """Great-circle distance in km between two equator longitudes."""

    def _km(lon_a, lon_b):
        return haversine_km(0.0, lon_a, 0.0, lon_b)

    return _km
