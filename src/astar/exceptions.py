"""
Custom exceptions for the astar module.

Provides a hierarchy of exceptions for clear error handling
and debugging of graph construction and route-search operations.
"""

from typing import Hashable


class AStarError(Exception):
    """Base exception for all astar module errors."""

    pass


# -------------------------
# Graph construction
# -------------------------


class GraphConstructionError(AStarError):
    """Base exception for malformed graph construction inputs."""

    pass


class EmptyLocationsError(GraphConstructionError):
    """Raised when the location collection is empty."""

    def __init__(self, message: str = "Cannot build a graph without locations") -> None:
        super().__init__(message)


class DuplicateLocationError(GraphConstructionError):
    """Raised when two locations share the same id."""

    def __init__(self, location_id: Hashable) -> None:
        self.location_id = location_id
        super().__init__(f"Duplicate location id: {location_id!r}")


class UnknownLocationError(GraphConstructionError):
    """Raised when a connection references a location that was not loaded."""

    def __init__(self, location_id: Hashable, context: str = "connection") -> None:
        self.location_id = location_id
        super().__init__(f"Location {location_id!r} referenced by {context} does not exist")


class NegativeDistanceError(GraphConstructionError):
    """Raised when a connection declares a negative distance."""

    def __init__(self, source_id: Hashable, destination_id: Hashable, distance: float) -> None:
        self.source_id = source_id
        self.destination_id = destination_id
        self.distance = distance
        super().__init__(
            f"Connection {source_id!r} -> {destination_id!r} has negative distance {distance}"
        )


class InvalidThresholdError(GraphConstructionError):
    """Raised when the ground-hop threshold is not a positive number."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold
        super().__init__(f"Ground-hop threshold must be > 0, got {threshold}")


# -------------------------
# Search input validation
# -------------------------


class ValidationError(AStarError):
    """Base exception for search input validation errors."""

    pass


class InvalidEndpointError(ValidationError):
    """Raised when a start or goal id is not a node of the graph."""

    def __init__(self, location_id: Hashable, role: str = "endpoint") -> None:
        self.location_id = location_id
        self.role = role
        super().__init__(f"{role.capitalize()} {location_id!r} is not a node of the graph")


class SameEndpointError(ValidationError):
    """Raised when start and goal are the same node."""

    def __init__(self, location_id: Hashable) -> None:
        self.location_id = location_id
        super().__init__(f"Start and goal must differ, both are {location_id!r}")


class InvalidLayoverCapError(ValidationError):
    """Raised when the layover cap is not a positive integer."""

    def __init__(self, max_layovers: int) -> None:
        self.max_layovers = max_layovers
        super().__init__(f"max_layovers must be a positive integer, got {max_layovers!r}")


class ThresholdMismatchError(ValidationError):
    """Raised when a query threshold differs from the one baked into the graph."""

    def __init__(self, requested: float, built_with: float) -> None:
        self.requested = requested
        self.built_with = built_with
        super().__init__(
            f"Graph was built with ground-hop threshold {built_with}, "
            f"query asked for {requested}"
        )


# -------------------------
# Search execution
# -------------------------


class SearchBudgetExceededError(AStarError):
    """Raised when a search runs past its expansion budget or deadline."""

    def __init__(self, reason: str, expanded: int, elapsed_seconds: float) -> None:
        self.reason = reason
        self.expanded = expanded
        self.elapsed_seconds = elapsed_seconds
        super().__init__(
            f"Search aborted ({reason}) after {expanded} expansions "
            f"in {elapsed_seconds:.3f}s"
        )
