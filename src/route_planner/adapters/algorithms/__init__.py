"""
Algorithm adapters for route planning.
"""

from src.route_planner.adapters.algorithms.astar_adapter import AStarPathFinder

__all__ = [
    "AStarPathFinder",
]
