"""
Custom exceptions for the route_planner package.

Raised by services when a request cannot be mapped onto the route graph.
"""


class RoutePlannerError(Exception):
    """Base exception for route planner errors."""

    pass


class UnknownAirportCodeError(RoutePlannerError):
    """Raised when an IATA/ICAO code does not match any loaded airport."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"No airport with IATA/ICAO code '{code}'")


class SameAirportError(RoutePlannerError):
    """Raised when source and destination resolve to the same airport."""

    def __init__(self, source: str, destination: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(
            f"Destination airport must be different from source airport "
            f"('{source}' and '{destination}' are the same airport)"
        )
