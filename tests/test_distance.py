"""
Tests for distance module.

Tests the scalar and vectorized haversine implementations.
"""

import math

import numpy as np
import pytest

from src.astar.distance import (
    EARTH_RADIUS_KM,
    distance,
    haversine_km,
    haversine_km_vectorized,
)


# -------------------------
# Scalar haversine
# -------------------------


class TestHaversine:
    """Tests for haversine_km and distance."""

    def test_identical_points_are_zero(self):
        assert haversine_km(59.4133, 24.8328, 59.4133, 24.8328) == 0.0

    def test_one_degree_on_equator(self):
        expected = 2 * math.pi * EARTH_RADIUS_KM / 360
        assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected)

    def test_symmetric(self):
        a = haversine_km(59.4133, 24.8328, 51.4706, -0.461941)
        b = haversine_km(51.4706, -0.461941, 59.4133, 24.8328)
        assert a == pytest.approx(b)

    def test_antipodal_points_half_circumference(self):
        assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * EARTH_RADIUS_KM)

    @pytest.mark.parametrize(
        "a,b,expected_km",
        [
            # Oakland -> San Francisco
            ((37.7213, -122.2208), (37.619, -122.375), 17.7),
            # Stansted -> Heathrow
            ((51.885, 0.235), (51.4706, -0.461941), 66.6),
            # Tallinn -> Helsinki
            ((59.4133, 24.8328), (60.3172, 24.9633), 100.8),
        ],
    )
    def test_known_airport_pairs(self, a, b, expected_km):
        assert distance(a, b) == pytest.approx(expected_km, abs=0.1)

    def test_distance_matches_scalar(self):
        assert distance((10.0, 20.0), (30.0, 40.0)) == haversine_km(10.0, 20.0, 30.0, 40.0)


# -------------------------
# Vectorized haversine
# -------------------------


class TestHaversineVectorized:
    """Tests for haversine_km_vectorized."""

    def test_one_to_many_matches_scalar(self):
        lats = np.array([0.0, 10.0, -45.0, 59.4])
        lons = np.array([1.0, 20.0, 170.0, 24.8])

        result = haversine_km_vectorized(0.0, 0.0, lats, lons)

        expected = [haversine_km(0.0, 0.0, lat, lon) for lat, lon in zip(lats, lons)]
        np.testing.assert_allclose(result, expected)

    def test_element_wise_matches_scalar(self):
        lat1 = np.array([59.4133, 37.7213])
        lon1 = np.array([24.8328, -122.2208])
        lat2 = np.array([60.3172, 37.619])
        lon2 = np.array([24.9633, -122.375])

        result = haversine_km_vectorized(lat1, lon1, lat2, lon2)

        assert result.shape == (2,)
        assert result[0] == pytest.approx(haversine_km(lat1[0], lon1[0], lat2[0], lon2[0]))
        assert result[1] == pytest.approx(haversine_km(lat1[1], lon1[1], lat2[1], lon2[1]))

    def test_empty_input(self):
        result = haversine_km_vectorized(0.0, 0.0, np.array([]), np.array([]))
        assert result.shape == (0,)

    def test_antipodal_does_not_produce_nan(self):
        result = haversine_km_vectorized(0.0, 0.0, np.array([0.0]), np.array([180.0]))
        assert not np.isnan(result[0])
