"""
Route result schemas.

Defines the output contract of the route finder: a found route expressed
with airport codes rather than internal location ids.
"""

from dataclasses import dataclass
from typing import List, Sequence

from src.astar.reconstruction import round_distance


@dataclass(frozen=True)
class RouteHop:
    """
    Immutable representation of one hop of a route.
    """

    hop_index: int
    source_id: int
    destination_id: int
    source: str
    destination: str
    distance: float
    is_ground_hop: bool


@dataclass(frozen=True)
class RouteResult:
    """
    Immutable representation of a found route.

    ``distance`` is the rounded total reported to consumers; the hops keep
    full precision.
    """

    source: str
    destination: str
    hops: tuple[RouteHop, ...]
    distance: int

    @property
    def exact_distance(self) -> float:
        """Sum of hop distances at full precision."""
        return sum(hop.distance for hop in self.hops)

    @property
    def route_codes(self) -> List[str]:
        """Ordered airport codes, source first."""
        if not self.hops:
            return []
        codes = [self.hops[0].source]
        for hop in self.hops:
            codes.append(hop.destination)
        return codes

    @property
    def num_flights(self) -> int:
        return sum(1 for hop in self.hops if not hop.is_ground_hop)

    @property
    def num_ground_hops(self) -> int:
        return sum(1 for hop in self.hops if hop.is_ground_hop)

    @classmethod
    def from_hops(
        cls,
        source: str,
        destination: str,
        hops: Sequence[RouteHop],
    ) -> "RouteResult":
        """
        Factory method to create a RouteResult from hops.

        The total is summed in hop order, so it matches the distance the
        search accumulated along the same path.

        Raises:
            ValueError: If ``hops`` is empty.
        """
        if not hops:
            raise ValueError("Route must have at least one hop")

        return cls(
            source=source,
            destination=destination,
            hops=tuple(hops),
            distance=round_distance(sum(hop.distance for hop in hops)),
        )
