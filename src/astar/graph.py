"""
Route graph construction.

Builds an immutable weighted directed graph from locations and direct
connections, adding ground-hop edges between every pair of locations
closer than a configured threshold.

A direct edge and a ground edge between the same ordered pair never
overwrite each other: both weights are kept in an EdgeBundle and the
search treats them as two distinct transitions.
"""

import logging
import math
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from .distance import haversine_km, haversine_km_vectorized
from .exceptions import (
    DuplicateLocationError,
    EmptyLocationsError,
    InvalidThresholdError,
    NegativeDistanceError,
    UnknownLocationError,
)
from .models import Connection, Location, LocationId

logger = logging.getLogger(__name__)

DEFAULT_GROUND_HOP_THRESHOLD_KM = 100.0


@dataclass(frozen=True, slots=True)
class Edge:
    """Outgoing transition from a node."""

    target: LocationId
    weight: float
    is_direct: bool

    @property
    def is_ground_hop(self) -> bool:
        return not self.is_direct


@dataclass(frozen=True, slots=True)
class EdgeBundle:
    """
    Both possible edges between one ordered pair of locations.

    Attributes:
        direct_weight: Weight of the direct connection, None if absent.
        ground_weight: Weight of the ground hop, None if absent.
    """

    direct_weight: Optional[float] = None
    ground_weight: Optional[float] = None

    @property
    def has_direct(self) -> bool:
        return self.direct_weight is not None

    @property
    def has_ground(self) -> bool:
        return self.ground_weight is not None


@dataclass(frozen=True, eq=False)
class RouteGraph:
    """
    Immutable route graph.

    Built once at startup and shared read-only by every query, so
    concurrent searches need no locking.

    Attributes:
        locations: Location id to Location (read-only view).
        adjacency: Location id to its outgoing edges (read-only view).
        bundles: (from, to) to EdgeBundle (read-only view).
        ground_hop_threshold_km: Proximity threshold used for ground edges.
    """

    locations: Mapping[LocationId, Location]
    adjacency: Mapping[LocationId, Tuple[Edge, ...]]
    bundles: Mapping[Tuple[LocationId, LocationId], EdgeBundle]
    ground_hop_threshold_km: float

    @property
    def nodes(self) -> frozenset:
        return frozenset(self.locations)

    @property
    def node_count(self) -> int:
        return len(self.locations)

    @property
    def direct_edge_count(self) -> int:
        return sum(1 for b in self.bundles.values() if b.has_direct)

    @property
    def ground_edge_count(self) -> int:
        return sum(1 for b in self.bundles.values() if b.has_ground)

    def has_node(self, node: LocationId) -> bool:
        return node in self.locations

    def neighbors(self, node: LocationId) -> Tuple[Edge, ...]:
        """Outgoing edges of ``node``; empty for unknown nodes."""
        return self.adjacency.get(node, ())

    def edge_bundle(self, source: LocationId, target: LocationId) -> Optional[EdgeBundle]:
        return self.bundles.get((source, target))

    def has_edge(self, source: LocationId, target: LocationId) -> bool:
        return (source, target) in self.bundles

    def inadmissible_edges(
        self, tolerance: float = 1e-6
    ) -> List[Tuple[LocationId, LocationId, float, float]]:
        """
        Direct edges shorter than the great-circle distance of their endpoints.

        Such edges make the distance heuristic inadmissible, so A* may
        return a sub-optimal route. Ground edges are exact by construction.

        Returns:
            List of (source, target, weight, great_circle_km) tuples.
        """
        violations = []
        for (source, target), bundle in self.bundles.items():
            if not bundle.has_direct:
                continue
            a = self.locations[source]
            b = self.locations[target]
            great_circle = haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
            if bundle.direct_weight + tolerance < great_circle:
                violations.append((source, target, bundle.direct_weight, great_circle))
        return violations


def _index_locations(locations: Iterable[Location]) -> Dict[LocationId, Location]:
    by_id: Dict[LocationId, Location] = {}
    for location in locations:
        if location.id in by_id:
            raise DuplicateLocationError(location.id)
        by_id[location.id] = location
    if not by_id:
        raise EmptyLocationsError()
    return by_id


def _collect_direct_weights(
    connections: Iterable[Connection],
    by_id: Mapping[LocationId, Location],
) -> Dict[Tuple[LocationId, LocationId], float]:
    """Keep the cheapest declared distance per ordered pair."""
    direct: Dict[Tuple[LocationId, LocationId], float] = {}
    for conn in connections:
        if conn.source_id not in by_id:
            raise UnknownLocationError(conn.source_id, "connection source")
        if conn.destination_id not in by_id:
            raise UnknownLocationError(conn.destination_id, "connection destination")
        # `not >=` also rejects NaN
        if not conn.distance >= 0:
            raise NegativeDistanceError(conn.source_id, conn.destination_id, conn.distance)

        key = (conn.source_id, conn.destination_id)
        weight = float(conn.distance)
        if key not in direct or weight < direct[key]:
            direct[key] = weight
    return direct


def _collect_ground_weights(
    by_id: Mapping[LocationId, Location],
    threshold_km: float,
) -> Dict[Tuple[LocationId, LocationId], float]:
    """
    Pairwise proximity pass, vectorized one row at a time.

    Only the upper triangle is computed and mirrored, so every ground edge
    has an identical twin in the opposite direction.
    """
    ids = list(by_id)
    lats = np.fromiter((by_id[i].latitude for i in ids), dtype=np.float64, count=len(ids))
    lons = np.fromiter((by_id[i].longitude for i in ids), dtype=np.float64, count=len(ids))

    ground: Dict[Tuple[LocationId, LocationId], float] = {}
    for i in range(len(ids) - 1):
        dists = haversine_km_vectorized(lats[i], lons[i], lats[i + 1 :], lons[i + 1 :])
        for offset in np.nonzero(dists < threshold_km)[0]:
            j = i + 1 + int(offset)
            weight = float(dists[offset])
            ground[(ids[i], ids[j])] = weight
            ground[(ids[j], ids[i])] = weight
    return ground


def build_graph(
    locations: Iterable[Location],
    connections: Iterable[Connection],
    ground_hop_threshold_km: float = DEFAULT_GROUND_HOP_THRESHOLD_KM,
) -> RouteGraph:
    """
    Build the immutable route graph.

    1. One node per location.
    2. One direct edge per connection (cheapest wins for repeated pairs).
    3. One ground edge per ordered pair of distinct locations strictly
       closer than ``ground_hop_threshold_km``.

    Args:
        locations: All locations; ids must be unique.
        connections: Direct connections between known locations.
        ground_hop_threshold_km: Proximity threshold for ground hops.

    Returns:
        Read-only RouteGraph.

    Raises:
        InvalidThresholdError: If the threshold is not a positive number.
        EmptyLocationsError: If no locations were given.
        DuplicateLocationError: If two locations share an id.
        UnknownLocationError: If a connection references an unknown id.
        NegativeDistanceError: If a connection distance is negative.
    """
    if not (ground_hop_threshold_km > 0 and math.isfinite(ground_hop_threshold_km)):
        raise InvalidThresholdError(ground_hop_threshold_km)

    start = time.perf_counter()

    by_id = _index_locations(locations)
    direct = _collect_direct_weights(connections, by_id)
    ground = _collect_ground_weights(by_id, ground_hop_threshold_km)

    bundles: Dict[Tuple[LocationId, LocationId], EdgeBundle] = {}
    for key, weight in direct.items():
        bundles[key] = EdgeBundle(direct_weight=weight)
    for key, weight in ground.items():
        existing = bundles.get(key)
        if existing is None:
            bundles[key] = EdgeBundle(ground_weight=weight)
        else:
            logger.debug(
                "Pair %r -> %r has both a direct (%.1f) and a ground (%.1f) edge",
                key[0], key[1], existing.direct_weight, weight,
            )
            bundles[key] = EdgeBundle(direct_weight=existing.direct_weight, ground_weight=weight)

    adjacency: Dict[LocationId, List[Edge]] = {node: [] for node in by_id}
    for (source, target), weight in direct.items():
        adjacency[source].append(Edge(target=target, weight=weight, is_direct=True))
    for (source, target), weight in ground.items():
        adjacency[source].append(Edge(target=target, weight=weight, is_direct=False))

    graph = RouteGraph(
        locations=MappingProxyType(by_id),
        adjacency=MappingProxyType({node: tuple(edges) for node, edges in adjacency.items()}),
        bundles=MappingProxyType(bundles),
        ground_hop_threshold_km=float(ground_hop_threshold_km),
    )

    logger.info(
        "Route graph built: %d locations, %d direct edges, %d ground edges in %.3fms",
        len(by_id),
        len(direct),
        len(ground),
        (time.perf_counter() - start) * 1000,
    )
    return graph
