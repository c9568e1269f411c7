"""CSV Graph Repository adapter.

Loads the network from a single edge table:

    from_station,to_station,line,distance_km
    A,B,Line1,3.0

Each row is one undirected connection. Incomplete or invalid rows are
logged and skipped.
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError
from ...graph.network import MetroGraph

REQUIRED_COLUMNS = ("from_station", "to_station", "line", "distance_km")


@dataclass
class CSVGraphRepository:
    """Graph repository that loads from a CSV edge table.

    Attributes:
        path: CSV file; defaults to the configured data path
    """

    path: Optional[Union[str, Path]] = None
    config: GraphConfig = field(default_factory=lambda: get_config().graph, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    _graph: Optional[MetroGraph] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.path = Path(self.path) if self.path is not None else self.config.data_path

    def load(self) -> MetroGraph:
        """Load the metro graph from the CSV file.

        Raises:
            GraphError: If the file cannot be read or lacks required columns.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug("Loading edge table", extra={"path": str(self.path)})

        try:
            with Path(self.path).open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or ())]
                if missing:
                    raise GraphError(
                        f"Missing columns {', '.join(missing)} in {self.path}",
                        file_path=str(self.path),
                    )
                graph = self._build(reader)
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise GraphError(
                f"Failed to load graph: {self.path}",
                file_path=str(self.path),
                cause=e,
            )

        self._graph = graph
        self._logger.info(
            "Graph loaded",
            extra={"stations": len(graph), "lines": len(graph.lines)},
        )
        return graph

    def _build(self, rows: Iterable[Mapping[str, Optional[str]]]) -> MetroGraph:
        graph = MetroGraph()

        # Row 1 is the header
        for number, row in enumerate(rows, start=2):
            from_id = (row.get("from_station") or "").strip()
            to_id = (row.get("to_station") or "").strip()
            line = (row.get("line") or "").strip()
            distance_str = (row.get("distance_km") or "").strip()

            if not from_id or not to_id or not line or not distance_str:
                self._skip(number, "incomplete row")
                continue
            if from_id == to_id:
                self._skip(number, "station connected to itself")
                continue

            try:
                distance = float(distance_str)
            except ValueError:
                self._skip(number, "unparsable distance")
                continue
            if not (math.isfinite(distance) and distance > 0):
                self._skip(number, "non-positive distance")
                continue

            graph.connect(from_id, to_id, line, distance)

        return graph

    def _skip(self, number: int, reason: str) -> None:
        self._logger.warning(
            "Skipping edge row", extra={"row_number": number, "reason": reason}
        )

    def clear_cache(self) -> None:
        """Clear the cached graph."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
