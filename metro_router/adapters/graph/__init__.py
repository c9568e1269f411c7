"""Graph adapters - Implementations of GraphRepositoryPort.

Available implementations:
- TimetableGraphRepository: Loads the line-timetable text format
- CSVGraphRepository: Loads a CSV edge table
"""

from .csv_repository import CSVGraphRepository
from .timetable_repository import TimetableGraphRepository

__all__ = ["CSVGraphRepository", "TimetableGraphRepository"]
