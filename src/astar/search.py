"""
Layover-bounded A* search over a RouteGraph.

Constraints enforced on every returned path:
- at most ``max_layovers`` direct-connection legs,
- the last allowed leg must land on the goal,
- no two consecutive ground hops.

Two state keyings are available:
- COMPOSITE (default): costs, parents and the closed set are keyed by
  (node, legs, arrived_via_ground). An expensive arrival with a better leg
  count or hop type is kept instead of being discarded.
- NODE: everything keyed by node id alone. Cheaper per query but may miss
  routes that need a costlier arrival with more leg budget left.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Mapping, Optional, Set, Union

from .distance import distance
from .exceptions import SearchBudgetExceededError
from .graph import RouteGraph
from .heap import IndexedMinHeap
from .models import Hop, Location, LocationId, PathNotFound, PathResult
from .reconstruction import reconstruct_path
from .validation import validate_search_inputs

logger = logging.getLogger(__name__)

DEFAULT_MAX_LAYOVERS = 4

INF = math.inf


class StateKeying(str, Enum):
    """How search bookkeeping is keyed."""

    NODE = "node"
    COMPOSITE = "composite"


@dataclass(frozen=True, slots=True)
class FrontierEntry:
    """Payload of a frontier slot."""

    node: LocationId
    legs: int
    arrived_via_ground: bool
    distance: float


@dataclass
class SearchState:
    """
    Per-query bookkeeping. Created fresh by every search, never shared.

    Missing keys in ``cost`` and ``priority`` mean +infinity.
    """

    cost: Dict[Hashable, float] = field(default_factory=dict)
    priority: Dict[Hashable, float] = field(default_factory=dict)
    parents: Dict[Hashable, Hashable] = field(default_factory=dict)
    arrivals: Dict[Hashable, Hop] = field(default_factory=dict)
    frontier: IndexedMinHeap = field(default_factory=IndexedMinHeap)
    visited: Set[Hashable] = field(default_factory=set)
    expanded: int = 0

    def best_cost(self, key: Hashable) -> float:
        return self.cost.get(key, INF)


def _node_key(node: LocationId, legs: int, arrived_via_ground: bool) -> Hashable:
    return node


def _composite_key(node: LocationId, legs: int, arrived_via_ground: bool) -> Hashable:
    return (node, legs, arrived_via_ground)


def _node_of_composite(key: Hashable) -> LocationId:
    return key[0]


def _node_of_node(key: Hashable) -> LocationId:
    return key


def _coordinate_lookup(
    graph: RouteGraph,
    locations: Optional[Union[Mapping[LocationId, Location], Iterable[Location]]],
) -> Mapping[LocationId, Location]:
    """Graph coordinates, optionally overridden by caller-supplied locations."""
    if locations is None:
        return graph.locations
    if isinstance(locations, Mapping):
        overrides = dict(locations)
    else:
        overrides = {location.id: location for location in locations}
    merged = dict(graph.locations)
    merged.update(overrides)
    return merged


def make_heuristic(
    coordinates: Mapping[LocationId, Location], goal_id: LocationId
) -> Callable[[LocationId], float]:
    """Great-circle distance to the goal, memoized per node for one query."""
    goal = coordinates[goal_id].coordinate
    cache: Dict[LocationId, float] = {}

    def heuristic(node: LocationId) -> float:
        value = cache.get(node)
        if value is None:
            value = distance(coordinates[node].coordinate, goal)
            cache[node] = value
        return value

    return heuristic


def _is_on_path(
    state: SearchState,
    key: Hashable,
    node: LocationId,
    node_of: Callable[[Hashable], LocationId],
) -> bool:
    """Whether ``node`` already appears on the path leading to ``key``."""
    current: Optional[Hashable] = key
    while current is not None:
        if node_of(current) == node:
            return True
        current = state.parents.get(current)
    return False


def _check_budget(
    state: SearchState,
    started: float,
    max_expansions: Optional[int],
    deadline_seconds: Optional[float],
) -> None:
    if max_expansions is not None and state.expanded >= max_expansions:
        raise SearchBudgetExceededError(
            "expansion budget", state.expanded, time.perf_counter() - started
        )
    if deadline_seconds is not None:
        elapsed = time.perf_counter() - started
        if elapsed > deadline_seconds:
            raise SearchBudgetExceededError("deadline", state.expanded, elapsed)


def find_path(
    graph: RouteGraph,
    start_id: LocationId,
    goal_id: LocationId,
    locations: Optional[Union[Mapping[LocationId, Location], Iterable[Location]]] = None,
    max_layovers: int = DEFAULT_MAX_LAYOVERS,
    ground_hop_threshold_km: Optional[float] = None,
    keying: StateKeying = StateKeying.COMPOSITE,
    max_expansions: Optional[int] = None,
    deadline_seconds: Optional[float] = None,
) -> PathResult:
    """
    Find the cheapest constrained route from ``start_id`` to ``goal_id``.

    Args:
        graph: Immutable graph from ``build_graph``.
        start_id: Start location id.
        goal_id: Goal location id.
        locations: Optional coordinates overriding the graph's own, used by
            the heuristic only.
        max_layovers: Cap on direct-connection legs.
        ground_hop_threshold_km: Already baked into the graph; when given it
            must match the graph's threshold.
        keying: State keying strategy (see module docstring).
        max_expansions: Abort after expanding this many states.
        deadline_seconds: Abort after this much wall-clock time.

    Returns:
        PathFound with the rounded total distance, or PathNotFound.

    Raises:
        InvalidEndpointError: If start or goal is not in the graph.
        SameEndpointError: If start equals goal.
        InvalidLayoverCapError: If max_layovers < 1.
        ThresholdMismatchError: If the given threshold differs from the graph's.
        SearchBudgetExceededError: If a budget is exhausted before a result.
    """
    validate_search_inputs(graph, start_id, goal_id, max_layovers, ground_hop_threshold_km)

    keying = StateKeying(keying)
    if keying is StateKeying.COMPOSITE:
        key_of, node_of = _composite_key, _node_of_composite
    else:
        key_of, node_of = _node_key, _node_of_node

    heuristic = make_heuristic(_coordinate_lookup(graph, locations), goal_id)
    started = time.perf_counter()

    state = SearchState()
    start_key = key_of(start_id, 0, False)
    state.cost[start_key] = 0.0
    state.priority[start_key] = heuristic(start_id)
    state.frontier.push(
        start_key,
        state.priority[start_key],
        FrontierEntry(node=start_id, legs=0, arrived_via_ground=False, distance=0.0),
    )

    while state.frontier:
        key, _, entry = state.frontier.pop()

        if entry.node == goal_id:
            logger.debug(
                "A* %r -> %r found after %d expansions in %.3fms (%s keying)",
                start_id, goal_id, state.expanded,
                (time.perf_counter() - started) * 1000, keying.value,
            )
            return reconstruct_path(
                state.parents, key, entry.distance, arrivals=state.arrivals, node_of=node_of
            )

        if entry.legs >= max_layovers:
            continue

        # Goal pops above are not expansions
        _check_budget(state, started, max_expansions, deadline_seconds)

        state.visited.add(key)
        state.expanded += 1
        current_cost = state.cost[key]

        for edge in graph.neighbors(entry.node):
            # Only one leg left: it must land on the goal
            if entry.legs > max_layovers - 2 and edge.target != goal_id and edge.is_direct:
                continue

            if entry.arrived_via_ground and not edge.is_direct:
                continue

            if keying is StateKeying.COMPOSITE and _is_on_path(state, key, edge.target, node_of):
                continue

            legs = entry.legs + 1 if edge.is_direct else entry.legs
            arrived_via_ground = not edge.is_direct
            next_key = key_of(edge.target, legs, arrived_via_ground)
            tentative = current_cost + edge.weight

            if tentative < state.best_cost(next_key) and next_key not in state.visited:
                state.parents[next_key] = key
                state.arrivals[next_key] = Hop(
                    source_id=entry.node,
                    destination_id=edge.target,
                    distance=edge.weight,
                    is_ground_hop=arrived_via_ground,
                )
                state.cost[next_key] = tentative
                estimate = tentative + heuristic(edge.target)
                state.priority[next_key] = estimate
                state.frontier.push_or_decrease(
                    next_key,
                    estimate,
                    FrontierEntry(
                        node=edge.target,
                        legs=legs,
                        arrived_via_ground=arrived_via_ground,
                        distance=entry.distance + edge.weight,
                    ),
                )

    logger.debug(
        "A* %r -> %r exhausted after %d expansions in %.3fms (%s keying)",
        start_id, goal_id, state.expanded,
        (time.perf_counter() - started) * 1000, keying.value,
    )
    return PathNotFound()
