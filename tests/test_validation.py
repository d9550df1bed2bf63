"""
Tests for validation module.

Tests search input validation functions and custom exceptions.
"""

import pytest

from src.astar.exceptions import (
    AStarError,
    InvalidEndpointError,
    InvalidLayoverCapError,
    SameEndpointError,
    ThresholdMismatchError,
    ValidationError,
)
from src.astar.validation import (
    validate_endpoint,
    validate_max_layovers,
    validate_search_inputs,
)


# -------------------------
# Fixtures
# -------------------------


@pytest.fixture
def graph(make_graph):
    return make_graph({"A": 0.0, "B": 10.0}, [("A", "B")])


# -------------------------
# Tests
# -------------------------


class TestValidateMaxLayovers:
    @pytest.mark.parametrize("cap", [1, 4, 100])
    def test_valid(self, cap):
        validate_max_layovers(cap)

    @pytest.mark.parametrize("cap", [0, -3, False, True, 1.0, None])
    def test_invalid(self, cap):
        with pytest.raises(InvalidLayoverCapError) as exc_info:
            validate_max_layovers(cap)
        assert exc_info.value.max_layovers is cap


class TestValidateEndpoint:
    def test_known_node(self, graph):
        validate_endpoint(graph, "A", "start")

    def test_unknown_node(self, graph):
        with pytest.raises(InvalidEndpointError) as exc_info:
            validate_endpoint(graph, "Z", "goal")
        assert exc_info.value.location_id == "Z"
        assert "Goal" in str(exc_info.value)


class TestValidateSearchInputs:
    def test_valid_inputs(self, graph):
        validate_search_inputs(graph, "A", "B", 4)

    def test_cap_checked_before_endpoints(self, graph):
        with pytest.raises(InvalidLayoverCapError):
            validate_search_inputs(graph, "Z", "Z", 0)

    def test_same_endpoint(self, graph):
        with pytest.raises(SameEndpointError):
            validate_search_inputs(graph, "A", "A", 4)

    def test_unknown_endpoint_before_same_endpoint(self, graph):
        with pytest.raises(InvalidEndpointError):
            validate_search_inputs(graph, "Z", "Z", 4)

    def test_threshold_mismatch_carries_both_values(self, graph):
        with pytest.raises(ThresholdMismatchError) as exc_info:
            validate_search_inputs(graph, "A", "B", 4, ground_hop_threshold_km=150.0)
        assert exc_info.value.requested == 150.0
        assert exc_info.value.built_with == 100.0


def test_exception_hierarchy():
    for exc in (InvalidEndpointError, SameEndpointError, InvalidLayoverCapError, ThresholdMismatchError):
        assert issubclass(exc, ValidationError)
    assert issubclass(ValidationError, AStarError)
