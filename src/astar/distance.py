"""
Great-circle distance on a spherical Earth.

Used both as the weight of ground-hop edges and as the A* heuristic.
The scalar form serves the search hot path; the vectorized form serves
the O(n^2) proximity pass of the graph builder and bulk connection
distance computation in data providers.
"""

import math
from typing import Tuple

import numpy as np

EARTH_RADIUS_KM = 6371.0

Coordinate = Tuple[float, float]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in kilometers.

    Inputs are decimal degrees. The result is symmetric, non-negative and
    zero for identical points.
    """
    rlat1 = math.radians(lat1)
    rlat2 = math.radians(lat2)
    dlat = rlat2 - rlat1
    dlon = math.radians(lon2) - math.radians(lon1)

    h = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


def distance(coord_a: Coordinate, coord_b: Coordinate) -> float:
    """Great-circle distance between two (latitude, longitude) pairs."""
    return haversine_km(coord_a[0], coord_a[1], coord_b[0], coord_b[1])


def haversine_km_vectorized(
    lat: float | np.ndarray,
    lon: float | np.ndarray,
    lats: np.ndarray,
    lons: np.ndarray,
) -> np.ndarray:
    """
    Vectorized haversine: one-to-many or element-wise many-to-many.

    Args:
        lat, lon: Origin point(s) in decimal degrees. Scalars broadcast
            against ``lats``/``lons``; arrays must match their shape.
        lats, lons: Destination points in decimal degrees.

    Returns:
        Array of distances in kilometers, same shape as ``lats``.

    Example:
        >>> haversine_km_vectorized(0.0, 0.0, np.array([0.0, 0.0]), np.array([0.0, 1.0]))
        array([  0.        , 111.19492664])
    """
    rlat1 = np.radians(lat)
    rlat2 = np.radians(np.asarray(lats, dtype=np.float64))
    dlat = rlat2 - rlat1
    dlon = np.radians(np.asarray(lons, dtype=np.float64)) - np.radians(lon)

    h = np.sin(dlat / 2) ** 2 + np.cos(rlat1) * np.cos(rlat2) * np.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(np.minimum(1.0, h)))
