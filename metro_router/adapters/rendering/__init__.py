"""Rendering adapters - Implementations of PathRendererPort.

Available implementations:
- TextPathRenderer: Plain-text riding guides and one-line summaries
"""

from .text_renderer import TextPathRenderer

__all__ = ["TextPathRenderer"]
