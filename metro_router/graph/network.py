"""In-memory metro graph.

This module defines MetroGraph, the single owner of every station, line
and edge. Ingestion adapters build it through ``connect``; once loading is
done the graph is only read, so one instance can be shared by any number
of concurrent queries.
"""

from __future__ import annotations

import math
from typing import Dict, Iterator, List

from ..domain.errors import GraphError, LineNotFoundError, StationNotFoundError
from ..domain.models import Edge, Line, Station, TransferStation


class MetroGraph:
    """Undirected, line-tagged, distance-weighted station graph."""

    def __init__(self) -> None:
        self._stations: Dict[str, Station] = {}
        self._lines: Dict[str, Line] = {}

    def add_station(self, name: str) -> Station:
        """Return the station called ``name``, creating it if needed."""
        station = self._stations.get(name)
        if station is None:
            station = Station(name)
            self._stations[name] = station
        return station

    def add_line(self, name: str) -> Line:
        """Return the line called ``name``, creating it if needed."""
        line = self._lines.get(name)
        if line is None:
            line = Line(name)
            self._lines[name] = line
        return line

    def connect(self, a: str, b: str, line: str, distance_km: float) -> None:
        """Connect two stations in both directions on one line.

        Both stations and the line are created on first reference and the
        stations are registered as members of the line. Connecting the same
        pair on the same line again replaces the previous edge pair; the
        same pair on another line gets its own independent edges.

        Raises:
            GraphError: If the distance is negative or not finite, or if a
                station is connected to itself.
        """
        if not math.isfinite(distance_km) or distance_km < 0:
            raise GraphError(f"Invalid distance {distance_km!r} between {a} and {b}")
        if a == b:
            raise GraphError(f"Cannot connect station {a} to itself")

        owner = self.add_line(line)
        source = self.add_station(a)
        destination = self.add_station(b)
        owner.add_station(source)
        owner.add_station(destination)

        forward = Edge(a, b, line, float(distance_km))
        source.add_edge(forward)
        destination.add_edge(forward.reversed())

    def station(self, name: str) -> Station:
        """Look up a station by exact name.

        Raises:
            StationNotFoundError: If no station has that name.
        """
        try:
            return self._stations[name]
        except KeyError:
            raise StationNotFoundError(
                f"Station not found: {name}", station_name=name
            ) from None

    def line(self, name: str) -> Line:
        """Look up a line by exact name.

        Raises:
            LineNotFoundError: If no line has that name.
        """
        try:
            return self._lines[name]
        except KeyError:
            raise LineNotFoundError(f"Line not found: {name}", line_name=name) from None

    @property
    def stations(self) -> Dict[str, Station]:
        return dict(self._stations)

    @property
    def lines(self) -> Dict[str, Line]:
        return dict(self._lines)

    def station_names(self) -> List[str]:
        return list(self._stations)

    def edges(self) -> Iterator[Edge]:
        """Iterate over every directed edge (two per connection)."""
        for station in self._stations.values():
            yield from station.edges()

    @property
    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())

    def transfer_stations(self) -> List[TransferStation]:
        """List every station served by two or more lines.

        Output follows station insertion order; sort it if a deterministic
        presentation order is needed.
        """
        return [
            TransferStation(station.name, frozenset(station.lines))
            for station in self._stations.values()
            if station.is_transfer
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._stations

    def __len__(self) -> int:
        return len(self._stations)

    def __repr__(self) -> str:
        return f"MetroGraph(stations={len(self._stations)}, lines={len(self._lines)})"
