"""
Repository adapters for route graph caching.
"""

from src.route_planner.adapters.repositories.route_graph_repo import (
    CachedRouteGraph,
    InMemoryRouteGraphCache,
    RouteGraphRepository,
    build_code_index,
)

__all__ = [
    "CachedRouteGraph",
    "InMemoryRouteGraphCache",
    "RouteGraphRepository",
    "build_code_index",
]
