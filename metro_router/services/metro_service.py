"""Metro query service - Main orchestrator.

This service is the query surface of the application: it loads the graph
once through a repository, runs PathFinder queries against it and prices
the resulting paths.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.models import (
    FareQuote,
    JourneyPlan,
    NearbyStation,
    Path,
    ReachableStation,
    TransferStation,
)
from ..graph.network import MetroGraph
from ..graph.pathfinder import PathFinder
from ..ports.graph import GraphRepositoryPort
from ..pricing.fare_calculator import FareCalculator

SINGLE_TICKET = "single"
CARD = "card"
ONE_DAY_PASS = "1-day"


@dataclass
class MetroQueryService:
    """Structural, routing and fare queries over one metro network.

    Attributes:
        graph_repository: Source of the graph, loaded lazily on first query
        fare_calculator: Fare functions for single and card journeys
    """

    graph_repository: GraphRepositoryPort
    fare_calculator: FareCalculator = field(default_factory=FareCalculator)

    _finder: Optional[PathFinder] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def graph(self) -> MetroGraph:
        return self.finder.graph

    @property
    def finder(self) -> PathFinder:
        if self._finder is None:
            with self._lock:
                if self._finder is None:
                    self._finder = PathFinder(self.graph_repository.load())
        return self._finder

    def list_transfer_stations(self) -> List[TransferStation]:
        """List transfer stations sorted by name."""
        return sorted(self.graph.transfer_stations(), key=lambda s: s.name)

    def within_hops(self, station: str, max_hops: int) -> List[NearbyStation]:
        return self.finder.within_hops(station, max_hops)

    def within_distance(self, station: str, max_km: float) -> List[ReachableStation]:
        return self.finder.within_distance(station, max_km)

    def all_paths(
        self, start: str, end: str, limit: Optional[int] = None
    ) -> List[Path]:
        """Enumerate simple paths from ``start`` to ``end``.

        Args:
            start: Departure station name.
            end: Arrival station name.
            limit: Stop after this many paths. ``None`` enumerates them all,
                which is exponential in the worst case.

        Returns:
            Paths in discovery order.
        """
        if limit is None:
            return self.finder.all_paths(start, end)
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        return list(itertools.islice(self.finder.iter_paths(start, end), limit))

    def shortest_path(self, start: str, end: str) -> Path:
        return self.finder.shortest_path(start, end)

    def line_stations(self, line: str) -> List[str]:
        """Member stations of a line, in ingestion order.

        Raises:
            LineNotFoundError: If the line does not exist.
        """
        return list(self.graph.line(line).station_names)

    def regular_fare(self, distance_km: float) -> float:
        return self.fare_calculator.regular_fare(distance_km)

    def card_fare(self, distance_km: float) -> float:
        return self.fare_calculator.card_fare(distance_km)

    def day_pass_fare(self, product_code: str) -> float:
        return self.fare_calculator.day_pass_fare(product_code)

    def fare_for(self, path: Path) -> FareQuote:
        return self.fare_calculator.quote(path)

    def plan_journey(self, start: str, end: str) -> JourneyPlan:
        """Shortest route between two stations with pricing advice.

        The recommendation is the one-day pass when a single ticket costs
        more than the pass, otherwise the card when it is cheaper than a
        single ticket, otherwise a single ticket.

        Raises:
            StationNotFoundError: If either station does not exist.
            PathNotFoundError: If no route connects them.
        """
        path = self.shortest_path(start, end)
        fare = self.fare_for(path)
        day_passes = self.fare_calculator.day_pass_products()

        recommendation = SINGLE_TICKET
        one_day = dict(day_passes).get(ONE_DAY_PASS)
        if one_day is not None and fare.regular > one_day:
            recommendation = ONE_DAY_PASS
        elif fare.card < fare.regular:
            recommendation = CARD

        self._logger.info(
            "Journey planned",
            extra={
                "start": start,
                "end": end,
                "distance_km": fare.distance_km,
                "recommendation": recommendation,
            },
        )
        return JourneyPlan(
            path=path,
            fare=fare,
            day_passes=day_passes,
            recommendation=recommendation,
        )
