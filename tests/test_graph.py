import math

import pytest

from metro_router.domain import (
    Edge,
    GraphError,
    LineNotFoundError,
    Path,
    StationNotFoundError,
    TransferStation,
)
from metro_router.graph import MetroGraph


def test_add_station_is_idempotent():
    graph = MetroGraph()

    first = graph.add_station("A")
    second = graph.add_station("A")

    assert first is second
    assert len(graph) == 1


def test_add_line_is_idempotent():
    graph = MetroGraph()

    assert graph.add_line("Line1") is graph.add_line("Line1")
    assert list(graph.lines) == ["Line1"]


def test_connect_is_symmetric(example_graph):
    a = example_graph.station("A")
    b = example_graph.station("B")

    assert a.edges_to("B") == (Edge("A", "B", "Line1", 3.0),)
    assert b.edges_to("A") == (Edge("B", "A", "Line1", 3.0),)


def test_connect_registers_line_membership(example_graph):
    b = example_graph.station("B")

    assert b.lines == ("Line1", "Line2")
    assert example_graph.line("Line1").station_names == ("A", "B", "C")
    assert example_graph.line("Line2").station_names == ("B", "D")
    for line in example_graph.lines.values():
        for station in line.stations:
            assert station.serves(line.name)


def test_two_lines_between_same_pair_keep_separate_edges():
    graph = MetroGraph()
    graph.connect("A", "B", "L1", 1.0)
    graph.connect("A", "B", "L2", 1.5)

    edges = graph.station("A").edges_to("B")

    assert {(e.line, e.distance_km) for e in edges} == {("L1", 1.0), ("L2", 1.5)}
    assert graph.edge_count == 4


def test_reconnecting_same_pair_on_same_line_replaces_edges():
    graph = MetroGraph()
    graph.connect("A", "B", "L1", 1.0)
    graph.connect("B", "A", "L1", 2.0)

    assert graph.station("A").edges_to("B") == (Edge("A", "B", "L1", 2.0),)
    assert graph.edge_count == 2


@pytest.mark.parametrize("distance", [-1.0, math.inf, math.nan])
def test_connect_rejects_invalid_distance(distance):
    graph = MetroGraph()

    with pytest.raises(GraphError):
        graph.connect("A", "B", "L1", distance)

    assert len(graph) == 0


def test_connect_rejects_self_loop():
    with pytest.raises(GraphError):
        MetroGraph().connect("A", "A", "L1", 1.0)


def test_missing_station_raises(example_graph):
    with pytest.raises(StationNotFoundError) as excinfo:
        example_graph.station("Z")

    assert excinfo.value.station_name == "Z"
    assert "Z" in str(excinfo.value)


def test_lookups_are_case_sensitive(example_graph):
    assert "A" in example_graph
    assert "a" not in example_graph
    with pytest.raises(StationNotFoundError):
        example_graph.station("a")


def test_missing_line_raises(example_graph):
    with pytest.raises(LineNotFoundError) as excinfo:
        example_graph.line("Line9")

    assert excinfo.value.line_name == "Line9"


def test_transfer_stations(example_graph):
    assert example_graph.transfer_stations() == [
        TransferStation("B", frozenset({"Line1", "Line2"}))
    ]


def test_no_transfer_stations_on_single_line():
    graph = MetroGraph()
    graph.connect("A", "B", "L1", 1.0)
    graph.connect("B", "C", "L1", 1.0)

    assert graph.transfer_stations() == []


def test_line_index_of(example_graph):
    line = example_graph.line("Line1")

    assert line.index_of("C") == 2
    assert line.has_station("B")
    assert not line.has_station("D")
    with pytest.raises(StationNotFoundError):
        line.index_of("D")


class TestPath:
    def test_single_station_path_has_no_movement(self):
        path = Path.starting_at("A")

        assert path.is_empty
        assert path.total_distance == 0.0
        assert path.transfer_count == 0
        assert path.legs() == ()

    def test_extend_returns_a_copy(self):
        start = Path.starting_at("A")
        branch_one = start.extend("B", "L1", 1.0)
        branch_two = start.extend("C", "L2", 2.0)

        assert start.stations == ("A",)
        assert branch_one.stations == ("A", "B")
        assert branch_two.stations == ("A", "C")

    def test_transfer_count_compares_adjacent_lines(self):
        path = (
            Path.starting_at("A")
            .extend("B", "L1", 1.0)
            .extend("C", "L2", 1.0)
            .extend("D", "L2", 1.0)
            .extend("E", "L1", 1.0)
        )

        assert path.transfer_count == 2
        assert path.total_distance == pytest.approx(4.0)

    def test_legs_group_consecutive_steps(self):
        path = (
            Path.starting_at("A")
            .extend("B", "L1", 3.0)
            .extend("C", "L1", 5.0)
            .extend("D", "L2", 2.0)
        )

        legs = path.legs()

        assert [(leg.line, leg.stations) for leg in legs] == [
            ("L1", ("A", "B", "C")),
            ("L2", ("C", "D")),
        ]
        assert legs[0].distance_km == pytest.approx(8.0)
        assert legs[1].boarding == "C"
        assert legs[1].alighting == "D"

    def test_sort_key_orders_by_distance_then_transfers(self):
        direct = Path.starting_at("A").extend("B", "L1", 2.0)
        changing = Path.starting_at("A").extend("X", "L1", 1.0).extend("B", "L2", 1.0)

        assert sorted([changing, direct], key=lambda p: p.sort_key) == [direct, changing]

    def test_mismatched_lengths_are_rejected(self):
        with pytest.raises(ValueError):
            Path(stations=("A", "B"), lines=(), distances=())
        with pytest.raises(ValueError):
            Path(stations=())
