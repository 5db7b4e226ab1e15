"""Package for grid composition and final rendering."""

from .compositor import compose_grid
from .renderer import SUPPORTED_FORMATS, normalize_format, render_canvas

__all__ = ["compose_grid", "render_canvas", "normalize_format", "SUPPORTED_FORMATS"]
