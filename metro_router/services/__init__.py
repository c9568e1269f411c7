"""Services layer - Application orchestration.

Available services:
- MetroQueryService: Query surface over a loaded metro network
"""

from .metro_service import MetroQueryService

__all__ = ["MetroQueryService"]
