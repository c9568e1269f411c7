"""Shared fixtures: small hand-built networks and configuration isolation."""

from __future__ import annotations

from pathlib import Path

import pytest

from metro_router.config import reset_config
from metro_router.container import reset_container
from metro_router.graph import MetroGraph, PathFinder


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def example_graph() -> MetroGraph:
    """A-B-C on Line1 (3 km, 5 km) and B-D on Line2 (2 km)."""
    graph = MetroGraph()
    graph.connect("A", "B", "Line1", 3.0)
    graph.connect("B", "C", "Line1", 5.0)
    graph.connect("B", "D", "Line2", 2.0)
    return graph


@pytest.fixture
def diamond_graph() -> MetroGraph:
    """Four stations with two routes around a square and a B-C shortcut."""
    graph = MetroGraph()
    graph.connect("A", "B", "L1", 1.0)
    graph.connect("B", "D", "L1", 1.0)
    graph.connect("A", "C", "L2", 2.0)
    graph.connect("C", "D", "L2", 2.0)
    graph.connect("B", "C", "L3", 1.0)
    return graph


@pytest.fixture
def finder(example_graph: MetroGraph) -> PathFinder:
    return PathFinder(example_graph)


@pytest.fixture
def example_timetable(tmp_path: Path) -> Path:
    path = tmp_path / "network.txt"
    path.write_text(
        "Line1站点间距\n"
        "站点名称\t间距（公里）\n"
        "A---B\t3.0\n"
        "B---C\t5.0\n"
        "\n"
        "Line2站点间距\n"
        "B---D\t2.0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def example_csv(tmp_path: Path) -> Path:
    path = tmp_path / "edges.csv"
    path.write_text(
        "from_station,to_station,line,distance_km\n"
        "A,B,Line1,3.0\n"
        "B,C,Line1,5.0\n"
        "B,D,Line2,2.0\n",
        encoding="utf-8",
    )
    return path
