"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the query core and the replaceable
front ends around it: where the graph comes from and how paths are shown.
"""

from .graph import GraphRepositoryPort
from .rendering import PathRendererPort

__all__ = [
    "GraphRepositoryPort",
    "PathRendererPort",
]
