"""
Core data model shared by the graph builder, the search and its callers.

Everything here is immutable. Location ids are opaque hashables (OpenFlights
uses ints); the search never inspects them beyond equality and hashing.
"""

from dataclasses import dataclass
from typing import Hashable, Optional, Tuple

LocationId = Hashable


@dataclass(frozen=True, slots=True)
class Location:
    """
    A place that can be travelled from or to.

    Attributes:
        id: Unique location id.
        latitude: Decimal degrees, WGS84.
        longitude: Decimal degrees, WGS84.
        iata: Optional 3-letter code (e.g. 'TLL').
        icao: Optional 4-letter code (e.g. 'EETN').
        name, city, country: Display metadata.
    """

    id: LocationId
    latitude: float
    longitude: float
    iata: Optional[str] = None
    icao: Optional[str] = None
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @property
    def coordinate(self) -> Tuple[float, float]:
        """(latitude, longitude) pair."""
        return (self.latitude, self.longitude)

    @property
    def code(self) -> Optional[str]:
        """Display code: IATA when known, ICAO otherwise."""
        return self.iata or self.icao


@dataclass(frozen=True, slots=True)
class Connection:
    """A direct connection (flight leg) between two locations."""

    source_id: LocationId
    destination_id: LocationId
    distance: float


@dataclass(frozen=True, slots=True)
class Hop:
    """One traversed edge of a found path."""

    source_id: LocationId
    destination_id: LocationId
    distance: float
    is_ground_hop: bool


class PathResult:
    """
    Outcome of a single search: either PathFound or PathNotFound.

    Use ``result.is_found`` (or isinstance) to tell the variants apart.
    """

    __slots__ = ()

    @property
    def is_found(self) -> bool:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PathNotFound(PathResult):
    """No route satisfies the layover and ground-hop constraints."""

    @property
    def is_found(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class PathFound(PathResult):
    """
    A cheapest route between start and goal.

    Attributes:
        path: Location ids, start first, goal last (at least two).
        distance: Total distance rounded to the nearest integer.
        exact_distance: Unrounded total distance.
        hops: Traversed edges in path order.
    """

    path: Tuple[LocationId, ...]
    distance: int
    exact_distance: float
    hops: Tuple[Hop, ...] = ()

    def __post_init__(self) -> None:
        if len(self.path) < 2:
            raise ValueError(f"A found path needs at least two nodes, got {len(self.path)}")
        if self.distance < 0:
            raise ValueError(f"distance must be >= 0, got {self.distance}")

    @property
    def is_found(self) -> bool:
        return True

    @property
    def start(self) -> LocationId:
        return self.path[0]

    @property
    def goal(self) -> LocationId:
        return self.path[-1]

    @property
    def num_flights(self) -> int:
        """Number of direct-connection legs on the path."""
        return sum(1 for hop in self.hops if not hop.is_ground_hop)

    @property
    def num_ground_hops(self) -> int:
        return sum(1 for hop in self.hops if hop.is_ground_hop)
