"""Graph-related code for representing the metro network.

This subpackage contains the in-memory graph built by the ingestion
adapters and the path-finding algorithms that run on top of it.
"""

from .network import MetroGraph
from .pathfinder import PathFinder

__all__ = ["MetroGraph", "PathFinder"]
