"""
Domain services for the Layover Router.

Services orchestrate the interaction between ports (repositories, algorithms)
and the domain (code resolution, result transformation).
"""

from src.route_planner.services.route_finder_service import RouteFinderService

__all__ = ["RouteFinderService"]
