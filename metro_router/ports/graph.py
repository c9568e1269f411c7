"""Graph ports - Abstractions for loading the metro network.

Ingestion is an external collaborator: any adapter that can produce a
MetroGraph satisfying the graph invariants (every edge references
registered stations, every edge exists in both directions) can back the
query service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..graph.network import MetroGraph


class GraphRepositoryPort(Protocol):
    """Port for loading graph data.

    Implementations:
    - adapters/graph/timetable_repository.py (TimetableGraphRepository)
    - adapters/graph/csv_repository.py (CSVGraphRepository)

    The repository is responsible for loading and caching the metro
    network from persistent storage.
    """

    def load(self) -> MetroGraph:
        """Load the metro graph.

        Returns:
            The fully built graph, ready for read-only queries.
        """
        ...

    def clear_cache(self) -> None:
        """Drop any cached graph so the next load re-reads the source."""
        ...
