"""
Schema definitions for the Layover Router.

Pandera-validated DataFrames as the data contracts at the provider
boundary; frozen dataclasses for queries and results.
"""

from .airport import (
    AirportDataFrame,
    AirportSchema,
    ConnectionDataFrame,
    ConnectionSchema,
)
from .constraints import RouteQuery
from .route import RouteHop, RouteResult

__all__ = [
    # Location schemas
    "AirportSchema",
    "ConnectionSchema",
    "AirportDataFrame",
    "ConnectionDataFrame",
    # Query
    "RouteQuery",
    # Route schemas
    "RouteHop",
    "RouteResult",
]
