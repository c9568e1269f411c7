"""Typed domain errors for the metro router.

Every query failure is a caller-input error: a name that does not exist,
an unreachable destination, an unknown ticket product. Nothing here is
transient, so none of these errors is ever retried.

All errors inherit from MetroError and can optionally wrap a root cause
exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class MetroError(Exception):
    """Base error for the metro router domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class StationNotFoundError(MetroError):
    """Station name not found in the graph.

    Attributes:
        station_name: The station name that was looked up
    """

    station_name: str = ""


@dataclass
class LineNotFoundError(MetroError):
    """Line name not found in the graph.

    Attributes:
        line_name: The line name that was looked up
    """

    line_name: str = ""


@dataclass
class PathNotFoundError(MetroError):
    """No path exists between the requested stations.

    Attributes:
        departure: Departure station name
        arrival: Arrival station name
    """

    departure: str = ""
    arrival: str = ""


@dataclass
class InvalidTicketTypeError(MetroError):
    """Unknown day-pass product code.

    Attributes:
        ticket_type: The product code that was requested
    """

    ticket_type: str = ""


@dataclass
class GraphError(MetroError):
    """Graph loading or data integrity error.

    Attributes:
        file_path: Path to the graph data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(MetroError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""
