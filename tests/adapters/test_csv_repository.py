"""Tests for the CSV edge table repository."""

import pytest

from metro_router.adapters.graph import CSVGraphRepository, TimetableGraphRepository
from metro_router.domain import GraphError


def test_load_builds_graph(example_csv):
    graph = CSVGraphRepository(path=example_csv).load()

    assert graph.station_names() == ["A", "B", "C", "D"]
    assert graph.line("Line2").station_names == ("B", "D")
    assert graph.station("D").edges_to("B")[0].distance_km == 2.0


def test_invalid_rows_are_skipped(tmp_path, caplog):
    path = tmp_path / "edges.csv"
    path.write_text(
        "from_station,to_station,line,distance_km\n"
        "A,B,L1,1.0\n"
        "B,,L1,1.0\n"
        "B,C,L1,far\n"
        "B,C,L1,-2\n"
        "C,C,L1,1.0\n"
        "B,C,L1,2.5\n",
        encoding="utf-8",
    )

    with caplog.at_level("WARNING"):
        graph = CSVGraphRepository(path=path).load()

    assert graph.edge_count == 4
    assert graph.station("B").edges_to("C")[0].distance_km == 2.5
    assert len([r for r in caplog.records if r.message == "Skipping edge row"]) == 4


def test_skipped_rows_report_file_row_numbers(tmp_path, caplog):
    path = tmp_path / "edges.csv"
    path.write_text(
        "from_station,to_station,line,distance_km\nA,B,L1,x\n", encoding="utf-8"
    )

    with caplog.at_level("WARNING"):
        CSVGraphRepository(path=path).load()

    assert caplog.records[-1].row_number == 2


def test_missing_columns_raise(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text("from_station,to_station\nA,B\n", encoding="utf-8")

    with pytest.raises(GraphError) as excinfo:
        CSVGraphRepository(path=path).load()

    assert "line" in str(excinfo.value)
    assert "distance_km" in str(excinfo.value)


def test_missing_file_raises(tmp_path):
    with pytest.raises(GraphError):
        CSVGraphRepository(path=tmp_path / "nope.csv").load()


def test_load_is_cached(example_csv):
    repository = CSVGraphRepository(path=example_csv)

    first = repository.load()

    assert repository.load() is first
    repository.clear_cache()
    assert repository.load() is not first


def test_matches_equivalent_timetable(example_csv, example_timetable):
    from_csv = CSVGraphRepository(path=example_csv).load()
    from_timetable = TimetableGraphRepository(path=example_timetable).load()

    assert from_csv.station_names() == from_timetable.station_names()
    assert set(from_csv.edges()) == set(from_timetable.edges())
    assert from_csv.transfer_stations() == from_timetable.transfer_stations()
