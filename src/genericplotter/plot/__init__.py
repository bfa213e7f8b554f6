
"""Value-to-pixel scaling and PNG rendering."""

from .render import draw_plot, render_png, write_png
from .scale import AxisScale, build_scales

__all__ = ["AxisScale", "build_scales", "draw_plot", "render_png", "write_png"]
