"""Domain layer - Core models and errors.

This module contains the graph vertices and lines, the immutable path and
result values produced by queries, and the typed errors used throughout
the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    GraphError,
    InvalidTicketTypeError,
    LineNotFoundError,
    MetroError,
    PathNotFoundError,
    StationNotFoundError,
)
from .models import (
    Edge,
    FareQuote,
    JourneyPlan,
    Leg,
    Line,
    NearbyStation,
    Path,
    PathStep,
    ReachableStation,
    Station,
    TransferStation,
)

__all__ = [
    # Models
    "Station",
    "Line",
    "Edge",
    "Path",
    "PathStep",
    "Leg",
    "TransferStation",
    "NearbyStation",
    "ReachableStation",
    "FareQuote",
    "JourneyPlan",
    # Errors
    "MetroError",
    "StationNotFoundError",
    "LineNotFoundError",
    "PathNotFoundError",
    "InvalidTicketTypeError",
    "GraphError",
    "ConfigurationError",
]
