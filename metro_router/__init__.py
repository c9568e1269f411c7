"""Top-level package for the metro router project.

The package answers structural and routing queries over a metro network:
transfer stations, nearby stations, simple paths, shortest routes and
distance-tiered fares. ``services.MetroQueryService`` is the entry point
for programmatic use; ``cli`` wraps it for the terminal.
"""

__version__ = "0.1.0"
