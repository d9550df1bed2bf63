"""
Tests for graph module.

Tests graph construction, ground-hop generation and edge bundles.
"""

import math

import pytest

from src.astar.exceptions import (
    DuplicateLocationError,
    EmptyLocationsError,
    GraphConstructionError,
    InvalidThresholdError,
    NegativeDistanceError,
    UnknownLocationError,
)
from src.astar.graph import EdgeBundle, build_graph
from src.astar.models import Connection, Location


# -------------------------
# Fixtures
# -------------------------


@pytest.fixture
def small_graph(make_graph):
    """
    A --flight--> B, B and C 0.5 degrees apart (ground hop), D far away.
    """
    return make_graph(
        {"A": 0.0, "B": 10.0, "C": 10.5, "D": 30.0},
        [("A", "B"), ("B", "D")],
    )


# -------------------------
# Construction
# -------------------------


class TestBuildGraph:
    """Tests for build_graph."""

    def test_nodes(self, small_graph):
        assert small_graph.nodes == frozenset({"A", "B", "C", "D"})
        assert small_graph.node_count == 4

    def test_direct_edges(self, small_graph, equator_km):
        bundle = small_graph.edge_bundle("A", "B")
        assert bundle.has_direct
        assert not bundle.has_ground
        assert bundle.direct_weight == pytest.approx(equator_km(0.0, 10.0))

    def test_direct_edges_are_directed(self, small_graph):
        assert small_graph.has_edge("A", "B")
        assert not small_graph.has_edge("B", "A")

    def test_ground_edges_both_directions(self, small_graph, equator_km):
        forward = small_graph.edge_bundle("B", "C")
        backward = small_graph.edge_bundle("C", "B")
        assert forward.ground_weight == pytest.approx(equator_km(10.0, 10.5))
        assert forward.ground_weight == backward.ground_weight
        assert not forward.has_direct

    def test_edge_counts(self, small_graph):
        assert small_graph.direct_edge_count == 2
        assert small_graph.ground_edge_count == 2

    def test_neighbors_of_unknown_node_is_empty(self, small_graph):
        assert small_graph.neighbors("ZZZ") == ()

    def test_neighbors_list_direct_then_ground(self, small_graph):
        edges = small_graph.neighbors("B")
        assert [(e.target, e.is_direct) for e in edges] == [("D", True), ("C", False)]

    def test_isolated_node_has_no_neighbors(self, make_graph):
        graph = make_graph({"A": 0.0, "B": 10.0, "Z": 50.0}, [("A", "B")])
        assert graph.has_node("Z")
        assert graph.neighbors("Z") == ()

    def test_threshold_bounds_ground_hops(self, make_graph, equator_km):
        gap = equator_km(0.0, 0.5)
        below = make_graph({"A": 0.0, "B": 0.5}, [], threshold=gap - 0.01)
        above = make_graph({"A": 0.0, "B": 0.5}, [], threshold=gap + 0.01)

        assert not below.has_edge("A", "B")
        assert above.has_edge("A", "B")

    def test_threshold_recorded(self, make_graph):
        graph = make_graph({"A": 0.0, "B": 1.0}, [], threshold=42)
        assert graph.ground_hop_threshold_km == 42.0

    def test_graph_is_read_only(self, small_graph):
        with pytest.raises(TypeError):
            small_graph.adjacency["A"] = ()
        with pytest.raises(TypeError):
            small_graph.locations["X"] = None

    def test_repeated_connection_keeps_cheapest(self, make_graph):
        graph = make_graph(
            {"A": 0.0, "B": 10.0},
            [("A", "B", 2000.0), ("A", "B", 1500.0), ("A", "B", 1800.0)],
        )
        assert graph.edge_bundle("A", "B").direct_weight == 1500.0
        assert len(graph.neighbors("A")) == 1

    def test_direct_and_ground_edge_coexist(self, make_graph, equator_km):
        graph = make_graph({"A": 0.0, "B": 0.5}, [("A", "B", 80.0)])

        bundle = graph.edge_bundle("A", "B")
        assert bundle.direct_weight == 80.0
        assert bundle.ground_weight == pytest.approx(equator_km(0.0, 0.5))

        kinds = sorted(e.is_direct for e in graph.neighbors("A"))
        assert kinds == [False, True]

    def test_integer_ids(self):
        graph = build_graph(
            [Location(1, 59.4, 24.8), Location(2, 59.6, 17.9)],
            [Connection(1, 2, 390.6)],
        )
        assert graph.has_edge(1, 2)


class TestGroundEdgeSymmetry:
    """Every ground edge has an identical twin in the opposite direction."""

    def test_symmetric_on_dense_cluster(self, make_graph):
        positions = {i: 0.17 * i for i in range(15)}
        graph = make_graph(positions, [])

        assert graph.ground_edge_count > 0
        for (source, target), bundle in graph.bundles.items():
            if bundle.has_ground:
                twin = graph.edge_bundle(target, source)
                assert twin is not None and twin.has_ground
                assert twin.ground_weight == bundle.ground_weight

    def test_no_self_loops(self, make_graph):
        graph = make_graph({"A": 0.0, "B": 0.1}, [])
        assert not graph.has_edge("A", "A")
        assert not graph.has_edge("B", "B")

    def test_colocated_airports_get_zero_weight_hop(self):
        graph = build_graph([Location("A", 10.0, 10.0), Location("B", 10.0, 10.0)], [])
        assert graph.edge_bundle("A", "B").ground_weight == 0.0


# -------------------------
# Construction errors
# -------------------------


class TestBuildGraphErrors:
    """Tests for malformed construction inputs."""

    def test_empty_locations(self):
        with pytest.raises(EmptyLocationsError):
            build_graph([], [])

    def test_duplicate_location(self):
        with pytest.raises(DuplicateLocationError) as exc_info:
            build_graph([Location("A", 0.0, 0.0), Location("A", 1.0, 1.0)], [])
        assert exc_info.value.location_id == "A"

    @pytest.mark.parametrize("source,destination", [("X", "A"), ("A", "X")])
    def test_unknown_location(self, source, destination):
        with pytest.raises(UnknownLocationError) as exc_info:
            build_graph([Location("A", 0.0, 0.0)], [Connection(source, destination, 1.0)])
        assert exc_info.value.location_id == "X"

    @pytest.mark.parametrize("bad_distance", [-1.0, math.nan])
    def test_negative_or_nan_distance(self, bad_distance):
        with pytest.raises(NegativeDistanceError):
            build_graph(
                [Location("A", 0.0, 0.0), Location("B", 0.0, 5.0)],
                [Connection("A", "B", bad_distance)],
            )

    @pytest.mark.parametrize("threshold", [0, -5.0, math.inf, math.nan])
    def test_invalid_threshold(self, threshold):
        with pytest.raises(InvalidThresholdError):
            build_graph([Location("A", 0.0, 0.0)], [], ground_hop_threshold_km=threshold)

    def test_errors_share_base_class(self):
        assert issubclass(EmptyLocationsError, GraphConstructionError)
        assert issubclass(NegativeDistanceError, GraphConstructionError)


# -------------------------
# Admissibility check
# -------------------------


class TestInadmissibleEdges:
    """Tests for RouteGraph.inadmissible_edges."""

    def test_great_circle_weights_are_admissible(self, make_graph):
        graph = make_graph({"A": 0.0, "B": 10.0, "C": 20.0}, [("A", "B"), ("B", "C")])
        assert graph.inadmissible_edges() == []

    def test_short_edge_reported(self, make_graph):
        graph = make_graph({"A": 0.0, "B": 10.0}, [("A", "B", 500.0)])

        violations = graph.inadmissible_edges()

        assert len(violations) == 1
        source, target, weight, great_circle = violations[0]
        assert (source, target, weight) == ("A", "B", 500.0)
        assert great_circle > 1000


class TestEdgeBundle:
    def test_empty_flags(self):
        bundle = EdgeBundle()
        assert not bundle.has_direct
        assert not bundle.has_ground
