"""
Input validation for the astar search.

Checks run before the search starts so a bad query fails fast with a clear
error instead of collapsing into a "no route" result.
"""

from typing import Hashable, Optional

from .exceptions import (
    InvalidEndpointError,
    InvalidLayoverCapError,
    SameEndpointError,
    ThresholdMismatchError,
)
from .graph import RouteGraph


def validate_max_layovers(max_layovers: int) -> None:
    """
    Validate the layover cap.

    Raises:
        InvalidLayoverCapError: If not an int >= 1 (bools are rejected).
    """
    if isinstance(max_layovers, bool) or not isinstance(max_layovers, int):
        raise InvalidLayoverCapError(max_layovers)
    if max_layovers < 1:
        raise InvalidLayoverCapError(max_layovers)


def validate_endpoint(graph: RouteGraph, location_id: Hashable, role: str) -> None:
    """
    Validate that an endpoint is a node of the graph.

    Raises:
        InvalidEndpointError: If the id is unknown.
    """
    if not graph.has_node(location_id):
        raise InvalidEndpointError(location_id, role)


def validate_search_inputs(
    graph: RouteGraph,
    start_id: Hashable,
    goal_id: Hashable,
    max_layovers: int,
    ground_hop_threshold_km: Optional[float] = None,
) -> None:
    """
    Validate all inputs of a search.

    Raises:
        InvalidLayoverCapError: If max_layovers is not a positive int.
        ThresholdMismatchError: If a threshold is given and differs from the
            one the graph was built with.
        InvalidEndpointError: If start or goal is not in the graph.
        SameEndpointError: If start equals goal.
    """
    validate_max_layovers(max_layovers)

    if (
        ground_hop_threshold_km is not None
        and ground_hop_threshold_km != graph.ground_hop_threshold_km
    ):
        raise ThresholdMismatchError(ground_hop_threshold_km, graph.ground_hop_threshold_km)

    validate_endpoint(graph, start_id, "start")
    validate_endpoint(graph, goal_id, "goal")

    if start_id == goal_id:
        raise SameEndpointError(start_id)
