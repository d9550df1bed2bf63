"""
Port interfaces for the Layover Router.

Ports define the abstract interfaces (ABCs and Protocols) that the domain
layer uses to communicate with external systems. This follows the
Ports and Adapters (Hexagonal) architecture pattern.
"""

from src.route_planner.ports.airport_data_provider import AirportDataProvider
from src.route_planner.ports.graph_repository import (
    GraphNotInitializedError,
    RouteGraphCache,
)
from src.route_planner.ports.path_finder import PathFinder

__all__ = [
    "AirportDataProvider",
    "GraphNotInitializedError",
    "PathFinder",
    "RouteGraphCache",
]
