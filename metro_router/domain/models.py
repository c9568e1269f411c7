"""Domain models for the metro router.

Stations and lines are the only mutable objects: their membership and
adjacency grow while a graph is being ingested and are treated as frozen
once queries begin. Everything a query returns (paths, neighbor records,
fare quotes) is a frozen dataclass, so results can be shared freely.

Stations refer to their neighbors by name rather than by object, which
keeps edges hashable values and avoids reference cycles in the graph.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .errors import StationNotFoundError


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed, line-tagged connection between two stations.

    Edges always exist in forward/backward pairs; see MetroGraph.connect.
    """

    source: str
    destination: str
    line: str
    distance_km: float

    def reversed(self) -> Edge:
        return Edge(self.destination, self.source, self.line, self.distance_km)


@dataclass(eq=False)
class Station:
    """A graph vertex identified by its name.

    Attributes:
        name: Unique, case-sensitive station name
    """

    name: str
    _lines: List[str] = field(default_factory=list, repr=False)
    # neighbor name -> line name -> edge
    _adjacency: Dict[str, Dict[str, Edge]] = field(default_factory=dict, repr=False)

    @property
    def lines(self) -> tuple[str, ...]:
        """Names of the lines serving this station, in join order."""
        return tuple(self._lines)

    @property
    def is_transfer(self) -> bool:
        """Check if two or more lines serve this station."""
        return len(self._lines) >= 2

    def serves(self, line_name: str) -> bool:
        return line_name in self._lines

    def join_line(self, line_name: str) -> None:
        if line_name not in self._lines:
            self._lines.append(line_name)

    def add_edge(self, edge: Edge) -> None:
        if edge.source != self.name:
            raise ValueError(f"Edge {edge} does not start at {self.name}")
        self._adjacency.setdefault(edge.destination, {})[edge.line] = edge

    def edges(self) -> Iterator[Edge]:
        """Iterate over every outgoing edge, on every line."""
        for by_line in self._adjacency.values():
            yield from by_line.values()

    def edges_on(self, line_name: str) -> Iterator[Edge]:
        """Iterate over outgoing edges tagged with one line."""
        for by_line in self._adjacency.values():
            edge = by_line.get(line_name)
            if edge is not None:
                yield edge

    def edges_to(self, neighbor: str) -> tuple[Edge, ...]:
        return tuple(self._adjacency.get(neighbor, {}).values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Station):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Line:
    """A named route grouping member stations.

    Member order is ingestion order, which is not necessarily the
    physical order of the stations along the route.
    """

    name: str
    _stations: List[Station] = field(default_factory=list, repr=False)
    _index: Dict[str, int] = field(default_factory=dict, repr=False)

    def add_station(self, station: Station) -> None:
        """Register a member station and the reverse membership."""
        if station.name not in self._index:
            self._index[station.name] = len(self._stations)
            self._stations.append(station)
        station.join_line(self.name)

    @property
    def stations(self) -> tuple[Station, ...]:
        return tuple(self._stations)

    @property
    def station_names(self) -> tuple[str, ...]:
        return tuple(station.name for station in self._stations)

    def has_station(self, station_name: str) -> bool:
        return station_name in self._index

    def index_of(self, station_name: str) -> int:
        """Return the ingestion position of a member station.

        Raises:
            StationNotFoundError: If the station is not on this line.
        """
        try:
            return self._index[station_name]
        except KeyError:
            raise StationNotFoundError(
                f"Station {station_name} is not on line {self.name}",
                station_name=station_name,
            ) from None

    def __len__(self) -> int:
        return len(self._stations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class PathStep:
    """One edge traversal of a path: the station reached, how, how far."""

    station: str
    line: str
    distance_km: float


@dataclass(frozen=True, slots=True)
class Leg:
    """Consecutive steps ridden on a single line.

    Attributes:
        line: Line ridden for the whole leg
        stations: Boarding station followed by every station passed
        distance_km: Distance covered on this leg
    """

    line: str
    stations: tuple[str, ...]
    distance_km: float

    @property
    def boarding(self) -> str:
        return self.stations[0]

    @property
    def alighting(self) -> str:
        return self.stations[-1]


@dataclass(frozen=True, slots=True)
class Path:
    """A route through the graph.

    ``lines[i]`` and ``distances[i]`` describe the step that reaches
    ``stations[i + 1]``; the first station has no incoming line.

    Paths are values: ``extend`` returns a new path and never mutates the
    receiver, so branches of a search never observe each other.

    Attributes:
        stations: Ordered station names (at least one)
        lines: Line used for each step
        distances: Distance of each step in kilometers
    """

    stations: tuple[str, ...]
    lines: tuple[str, ...] = ()
    distances: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if not self.stations:
            raise ValueError("A path needs at least one station")
        steps = len(self.stations) - 1
        if len(self.lines) != steps or len(self.distances) != steps:
            raise ValueError(
                f"Path with {len(self.stations)} stations needs {steps} "
                f"lines and distances, got {len(self.lines)} and {len(self.distances)}"
            )

    @classmethod
    def starting_at(cls, station: str) -> Path:
        """Return the no-movement path made of a single station."""
        return cls(stations=(station,))

    def extend(self, station: str, line: str, distance_km: float) -> Path:
        """Return a copy of this path with one more step appended."""
        return Path(
            stations=self.stations + (station,),
            lines=self.lines + (line,),
            distances=self.distances + (distance_km,),
        )

    @property
    def origin(self) -> str:
        return self.stations[0]

    @property
    def destination(self) -> str:
        return self.stations[-1]

    @property
    def total_distance(self) -> float:
        return math.fsum(self.distances)

    @property
    def transfer_count(self) -> int:
        """Number of adjacent steps whose line differs."""
        return sum(
            1
            for previous, current in zip(self.lines, self.lines[1:])
            if previous != current
        )

    @property
    def num_stations(self) -> int:
        return len(self.stations)

    @property
    def is_empty(self) -> bool:
        """Check if the path involves no movement."""
        return len(self.stations) == 1

    @property
    def sort_key(self) -> tuple[float, int]:
        """Order by distance first, then by number of transfers."""
        return (self.total_distance, self.transfer_count)

    def contains(self, station: str) -> bool:
        return station in self.stations

    def steps(self) -> Iterator[PathStep]:
        for station, line, distance in zip(
            self.stations[1:], self.lines, self.distances
        ):
            yield PathStep(station, line, distance)

    def legs(self) -> tuple[Leg, ...]:
        """Group consecutive steps on the same line."""
        legs: List[Leg] = []
        current_line: Optional[str] = None
        stations: List[str] = []
        distance = 0.0
        boarding = self.origin

        for step in self.steps():
            if step.line != current_line:
                if current_line is not None:
                    legs.append(Leg(current_line, tuple(stations), distance))
                    boarding = stations[-1]
                current_line = step.line
                stations = [boarding]
                distance = 0.0
            stations.append(step.station)
            distance += step.distance_km

        if current_line is not None:
            legs.append(Leg(current_line, tuple(stations), distance))
        return tuple(legs)


@dataclass(frozen=True, slots=True)
class TransferStation:
    """A station served by two or more lines."""

    name: str
    lines: frozenset[str]


@dataclass(frozen=True, slots=True)
class NearbyStation:
    """A station found by the bounded-hop search.

    Attributes:
        name: Station name
        line: Line through which it was first discovered
        hops: Number of single-line edge traversals from the start
    """

    name: str
    line: str
    hops: int


@dataclass(frozen=True, slots=True)
class ReachableStation:
    """A station found by the bounded-distance search.

    Attributes:
        name: Station name
        line: Line of the last edge on the shortest route to it
        distance_km: Shortest cumulative distance from the start
    """

    name: str
    line: str
    distance_km: float


@dataclass(frozen=True, slots=True)
class FareQuote:
    """Single-journey prices for a given distance."""

    distance_km: float
    regular: float
    card: float

    @property
    def card_saving(self) -> float:
        return round(self.regular - self.card, 2)


@dataclass(frozen=True, slots=True)
class JourneyPlan:
    """Shortest route between two stations with its pricing options.

    Attributes:
        path: Shortest path by distance
        fare: Single-journey prices for that path
        day_passes: Day-pass product code -> fixed price
        recommendation: Product code of the cheapest sensible option
    """

    path: Path
    fare: FareQuote
    day_passes: tuple[tuple[str, float], ...] = field(default_factory=tuple)
    recommendation: str = "single"
