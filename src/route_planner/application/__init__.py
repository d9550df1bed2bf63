"""
Application layer for the Layover Router.

Provides the public API for the routing engine: a facade handling
dependency initialization behind a simple search interface.
"""

from src.route_planner.application.find_cheapest_route import FindCheapestRoute

__all__ = ["FindCheapestRoute"]
