"""Page renderers turning engine pages into text."""

from .base import CallableRenderer, PageRenderer
from .line_reconstructor import LineReconstructor, reconstruct_lines

__all__ = ["CallableRenderer", "LineReconstructor", "PageRenderer", "reconstruct_lines"]
