"""Rendering port - Abstraction for presenting paths to users."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Path


class PathRendererPort(Protocol):
    """Port for path presentation.

    Implementation: adapters/rendering/text_renderer.py

    Renderers must not assume any fixed number of stations.
    """

    def render(self, path: Path) -> str:
        """Render a path as a step-by-step riding guide."""
        ...

    def render_summary(self, path: Path) -> str:
        """Render a path on a single line."""
        ...
