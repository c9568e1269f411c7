"""Timetable text graph repository adapter.

Reads the line-by-line distance tables published for the network:

    1号线站点间距
    站点名称	间距（公里）
    汉口北---滠口新城	2.283
    滠口新城---滕子岗	1.371

A header ending in ``站点间距`` opens a new line; every ``A---B  km`` row
below it connects two stations on that line. Rows that cannot be parsed
are logged and skipped, so the graph never receives a dangling edge.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError
from ...graph.network import MetroGraph

HEADER_MARKER = "站点间距"
COLUMN_TITLE_MARKERS = ("站点名称", "间距（公里）", "间距(公里)")
EDGE_SEPARATOR = "---"

_EDGE_ROW = re.compile(
    r"^(?P<source>.+?)\s*---\s*(?P<destination>.+?)\s+(?P<distance>\S+)\s*$"
)


@dataclass
class TimetableGraphRepository:
    """Graph repository that loads the timetable text format.

    Attributes:
        path: Timetable file; defaults to the configured data path
        encoding: Text encoding of the file
    """

    path: Optional[Union[str, Path]] = None
    encoding: str = "utf-8"
    config: GraphConfig = field(default_factory=lambda: get_config().graph, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    _graph: Optional[MetroGraph] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.path = Path(self.path) if self.path is not None else self.config.data_path

    def load(self) -> MetroGraph:
        """Load the metro graph from the timetable file.

        Raises:
            GraphError: If the file cannot be read.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug("Loading timetable", extra={"path": str(self.path)})

        try:
            with Path(self.path).open(encoding=self.encoding) as f:
                graph = self.parse(f)
        except (OSError, UnicodeDecodeError) as e:
            raise GraphError(
                f"Failed to load timetable: {self.path}",
                file_path=str(self.path),
                cause=e,
            )

        self._graph = graph
        self._logger.info(
            "Graph loaded",
            extra={"stations": len(graph), "lines": len(graph.lines)},
        )
        return graph

    def parse(self, rows: Iterable[str]) -> MetroGraph:
        """Build a graph from timetable rows."""
        graph = MetroGraph()
        current_line: Optional[str] = None

        for number, raw in enumerate(rows, start=1):
            row = raw.strip()
            if not row:
                continue

            if HEADER_MARKER in row and EDGE_SEPARATOR not in row:
                current_line = row.split(HEADER_MARKER, 1)[0].strip()
                if current_line:
                    graph.add_line(current_line)
                else:
                    self._skip(number, row, "empty line name")
                    current_line = None
                continue

            if any(marker in row for marker in COLUMN_TITLE_MARKERS):
                continue

            if EDGE_SEPARATOR not in row:
                self._skip(number, row, "not a station pair")
                continue
            if current_line is None:
                self._skip(number, row, "station pair before any line header")
                continue

            match = _EDGE_ROW.match(row)
            if match is None:
                self._skip(number, row, "missing distance")
                continue

            try:
                distance = float(match["distance"])
            except ValueError:
                self._skip(number, row, "unparsable distance")
                continue
            if not (math.isfinite(distance) and distance > 0):
                self._skip(number, row, "non-positive distance")
                continue

            source = match["source"].strip()
            destination = match["destination"].strip()
            if source == destination:
                self._skip(number, row, "station connected to itself")
                continue

            graph.connect(
                source,
                destination,
                current_line,
                distance,
            )

        return graph

    def _skip(self, number: int, row: str, reason: str) -> None:
        self._logger.warning(
            "Skipping timetable row",
            extra={"row_number": number, "row": row, "reason": reason},
        )

    def clear_cache(self) -> None:
        """Clear the cached graph."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
