"""
Data provider adapters for airport and connection data.
"""

from src.route_planner.adapters.data_providers.openflights_provider import (
    OpenFlightsDataProvider,
)

__all__ = [
    "OpenFlightsDataProvider",
]
