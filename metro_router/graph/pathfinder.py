"""Traversal algorithms over a MetroGraph.

PathFinder never mutates the graph. Each call allocates its own queues,
visited sets and distance maps, so a single PathFinder can serve
concurrent callers sharing one graph.

Resource caveat: ``iter_paths`` / ``all_paths`` enumerate every simple
path between two stations, which is exponential in the worst case on a
dense or cyclic network. The engine does not cap the result set; callers
must bound it themselves, e.g. with ``itertools.islice(iter_paths(...), n)``.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator, List, Set, Tuple

from ..domain.errors import PathNotFoundError
from ..domain.models import Edge, NearbyStation, Path, ReachableStation
from .network import MetroGraph

# Absorbs float error when summing edge distances against a radius.
RADIUS_TOLERANCE_KM = 1e-9


@dataclass
class PathFinder:
    """Shortest path, simple-path enumeration and neighbor searches.

    Attributes:
        graph: The graph to query; treated as read-only.
    """

    graph: MetroGraph
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def within_hops(self, start: str, max_hops: int) -> List[NearbyStation]:
        """Find stations at most ``max_hops`` single-line hops from ``start``.

        The search runs one breadth-first frontier per line serving
        ``start``; expanding an entry only follows edges of that entry's
        line, so hops never cross a transfer. The visited set is shared by
        all frontiers: a station reachable on two lines is reported once,
        with whichever (line, hops) pair was discovered first.

        Args:
            start: Name of the station to search from (excluded from results).
            max_hops: Maximum number of hops; 0 gives an empty result.

        Returns:
            Discovered stations in breadth-first order.

        Raises:
            StationNotFoundError: If ``start`` is not in the graph.
            ValueError: If ``max_hops`` is negative.
        """
        origin = self.graph.station(start)
        if max_hops < 0:
            raise ValueError(f"max_hops must be non-negative, got {max_hops}")

        self._logger.debug(
            "Searching by hops", extra={"start": start, "max_hops": max_hops}
        )

        visited: Set[str] = {origin.name}
        queue: Deque[Tuple[str, int, str]] = deque(
            (origin.name, 0, line) for line in origin.lines
        )
        found: List[NearbyStation] = []

        while queue:
            name, hops, line = queue.popleft()
            if hops > 0:
                found.append(NearbyStation(name, line, hops))
            if hops >= max_hops:
                continue
            for edge in self.graph.station(name).edges_on(line):
                if edge.destination not in visited:
                    visited.add(edge.destination)
                    queue.append((edge.destination, hops + 1, line))

        return found

    def within_distance(self, start: str, max_km: float) -> List[ReachableStation]:
        """Find stations whose shortest distance from ``start`` is ``<= max_km``.

        Dijkstra-style search that relaxes through every line at each popped
        station but stops expanding once the popped distance reaches
        ``max_km``. Results come out in non-decreasing distance order.
        Distances within ``RADIUS_TOLERANCE_KM`` of the radius count as
        inside it, so 0.1 + 0.2 km is within 0.3 km.

        Raises:
            StationNotFoundError: If ``start`` is not in the graph.
            ValueError: If ``max_km`` is negative.
        """
        origin = self.graph.station(start)
        if max_km < 0:
            raise ValueError(f"max_km must be non-negative, got {max_km}")

        self._logger.debug(
            "Searching by distance", extra={"start": start, "max_km": max_km}
        )

        best: Dict[str, float] = {origin.name: 0.0}
        counter = itertools.count()
        heap: List[Tuple[float, int, str, str]] = [(0.0, next(counter), origin.name, "")]
        settled: Set[str] = set()
        found: List[ReachableStation] = []

        while heap:
            distance, _, name, line = heapq.heappop(heap)
            if name in settled or distance > best.get(name, float("inf")):
                continue
            if distance > max_km + RADIUS_TOLERANCE_KM:
                break
            settled.add(name)

            if name != origin.name:
                found.append(ReachableStation(name, line, distance))
            if distance >= max_km:
                continue

            for edge in self.graph.station(name).edges():
                candidate = distance + edge.distance_km
                if candidate < best.get(edge.destination, float("inf")):
                    best[edge.destination] = candidate
                    heapq.heappush(
                        heap, (candidate, next(counter), edge.destination, edge.line)
                    )

        return found

    def iter_paths(self, start: str, end: str) -> Iterator[Path]:
        """Lazily enumerate every simple path from ``start`` to ``end``.

        Depth-first backtracking on an explicit stack with one visited set:
        a neighbor joins the set before its branch is explored and leaves
        it once the branch is exhausted. Reaching ``end`` yields the path
        without expanding past it. Parallel edges on different lines count
        as different paths.

        Raises:
            StationNotFoundError: If either endpoint is not in the graph.
        """
        origin = self.graph.station(start)
        target = self.graph.station(end)

        self._logger.debug("Enumerating paths", extra={"start": start, "end": end})

        visited: Set[str] = {origin.name}
        stack: List[Tuple[str, Iterator[Edge], Path]] = [
            (origin.name, origin.edges(), Path.starting_at(origin.name))
        ]

        while stack:
            name, pending, path = stack[-1]
            if name == target.name:
                yield path
                stack.pop()
                visited.discard(name)
                continue

            for edge in pending:
                if edge.destination not in visited:
                    visited.add(edge.destination)
                    stack.append(
                        (
                            edge.destination,
                            self.graph.station(edge.destination).edges(),
                            path.extend(edge.destination, edge.line, edge.distance_km),
                        )
                    )
                    break
            else:
                stack.pop()
                visited.discard(name)

    def all_paths(self, start: str, end: str) -> List[Path]:
        """Return every simple path from ``start`` to ``end``.

        See the module docstring for the resource caveat; use
        ``iter_paths`` to bound the work.
        """
        paths = list(self.iter_paths(start, end))
        self._logger.info(
            "Paths enumerated",
            extra={"start": start, "end": end, "count": len(paths)},
        )
        return paths

    def shortest_path(self, start: str, end: str) -> Path:
        """Find the shortest path by total distance.

        Ties in cumulative distance go to whichever relaxation happened
        first. Transfer count is not minimised: of two equal-distance
        routes, the one with more transfers may be returned.

        Raises:
            StationNotFoundError: If either endpoint is not in the graph.
            PathNotFoundError: If ``end`` is unreachable from ``start``.
        """
        origin = self.graph.station(start)
        target = self.graph.station(end)

        self._logger.debug("Solving route", extra={"start": start, "end": end})

        if origin.name == target.name:
            return Path.starting_at(origin.name)

        distances: Dict[str, float] = {name: float("inf") for name in self.graph.station_names()}
        distances[origin.name] = 0.0
        previous: Dict[str, Edge] = {}

        counter = itertools.count()
        heap: List[Tuple[float, int, str]] = [(0.0, next(counter), origin.name)]

        while heap:
            current_distance, _, u = heapq.heappop(heap)

            if current_distance > distances[u]:
                continue
            if u == target.name or current_distance == float("inf"):
                break

            for edge in self.graph.station(u).edges():
                new_distance = current_distance + edge.distance_km
                if new_distance < distances[edge.destination]:
                    distances[edge.destination] = new_distance
                    previous[edge.destination] = edge
                    heapq.heappush(heap, (new_distance, next(counter), edge.destination))

        if target.name not in previous:
            self._logger.warning("No route found", extra={"start": start, "end": end})
            raise PathNotFoundError(
                f"No path from {start} to {end}", departure=start, arrival=end
            )

        edges: List[Edge] = []
        current = target.name
        while current != origin.name:
            edge = previous[current]
            edges.append(edge)
            current = edge.source
        edges.reverse()

        path = Path.starting_at(origin.name)
        for edge in edges:
            path = path.extend(edge.destination, edge.line, edge.distance_km)

        self._logger.info(
            "Route found",
            extra={
                "start": start,
                "end": end,
                "stops": path.num_stations,
                "distance_km": path.total_distance,
                "transfers": path.transfer_count,
            },
        )
        return path
