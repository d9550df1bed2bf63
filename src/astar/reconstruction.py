import math
from typing import Callable, Hashable, List, Mapping, Optional

from .models import Hop, LocationId, PathFound


def round_distance(distance: float) -> int:
    """Round half up to the nearest integer (2.5 -> 3, not banker's 2)."""
    return int(math.floor(distance + 0.5))


def _identity(key: Hashable) -> LocationId:
    return key


def reconstruct_path(
    parents: Mapping[Hashable, Hashable],
    goal: Hashable,
    total_distance: float,
    arrivals: Optional[Mapping[Hashable, Hop]] = None,
    node_of: Callable[[Hashable], LocationId] = _identity,
) -> PathFound:
    """
    Reconstruct the start -> goal path from a parent map.

    Walks ``parents`` from ``goal`` back to the key with no parent (the
    start), then reverses.

    Args:
        parents: Search key to the key it was reached from.
        goal: Key of the goal state.
        total_distance: Full-precision accumulated distance.
        arrivals: Optional search key to the Hop used to reach it.
        node_of: Maps a search key to its location id (keys may be
            composite states rather than plain ids).

    Returns:
        PathFound with the rounded distance.
    """
    keys: List[Hashable] = [goal]
    current = goal
    while current in parents:
        current = parents[current]
        keys.append(current)
        if len(keys) > len(parents) + 1:
            raise RuntimeError("Parent map contains a cycle")

    keys.reverse()

    hops = ()
    if arrivals is not None:
        hops = tuple(arrivals[key] for key in keys[1:])

    return PathFound(
        path=tuple(node_of(key) for key in keys),
        distance=round_distance(total_distance),
        exact_distance=float(total_distance),
        hops=hops,
    )
