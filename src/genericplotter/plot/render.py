from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..config import DEFAULT_MARKER_SIZE, PlotSettings
from ..data.loader import Dataset, load_dataset
from ..errors import RenderError
from ..utils.io import write_bytes
from .scale import AxisScale, build_scales

logger = logging.getLogger(__name__)

# Power of two, so that size / DPI * DPI == size exactly and the PNG has the requested pixels
DPI = 64

BACKGROUND = "white"
AXIS_COLOR = "black"
MARKER_COLOR = "#1f4fd1"

AXIS_OFFSET = 1.0
TICK_LENGTH = 5.0
LINE_WIDTH = 1.0
TICK_FONTSIZE = 8
LABEL_FONTSIZE = 11
TITLE_FONTSIZE = 14
EDGE_PAD = 24.0


def _fmt(value: float) -> str:
    return f"{value:g}"


def _halign(px: float, size: int) -> str:
    if px < EDGE_PAD:
        return "left"
    if px > size - EDGE_PAD:
        return "right"
    return "center"


def _valign(py: float, size: int) -> str:
    if py < EDGE_PAD:
        return "bottom"
    if py > size - EDGE_PAD:
        return "top"
    return "center"


def _new_canvas(xsize: int, ysize: int) -> Tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(figsize=(xsize / DPI, ysize / DPI), dpi=DPI, facecolor=BACKGROUND)
    # axes spans the whole figure, so data coordinates are pixel coordinates
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0, xsize)
    ax.set_ylim(0, ysize)
    ax.set_axis_off()
    return fig, ax


def _draw_axes(ax: plt.Axes, xscale: AxisScale, yscale: AxisScale) -> None:
    xsize, ysize = xscale.size, yscale.size
    o = AXIS_OFFSET
    line_kw = dict(color=AXIS_COLOR, linewidth=LINE_WIDTH, solid_capstyle="butt", zorder=1)
    text_kw = dict(color=AXIS_COLOR, fontsize=TICK_FONTSIZE, zorder=2, parse_math=False)

    ax.plot([0, xsize], [o, o], **line_kw)
    ax.plot([o, o], [0, ysize], **line_kw)

    for value, px in xscale.ticks():
        ax.plot([px, px], [o, o + TICK_LENGTH], **line_kw)
        ax.text(px, o + TICK_LENGTH + 1, _fmt(value), ha=_halign(px, xsize), va="bottom", **text_kw)
    for value, py in yscale.ticks():
        ax.plot([o, o + TICK_LENGTH], [py, py], **line_kw)
        ax.text(o + TICK_LENGTH + 2, py, _fmt(value), ha="left", va=_valign(py, ysize), **text_kw)


def _draw_labels(ax: plt.Axes, xsize: int, ysize: int, xdesc: str, ydesc: str, title: str) -> None:
    label_kw = dict(color=AXIS_COLOR, fontsize=LABEL_FONTSIZE, zorder=2, parse_math=False)
    if xdesc:
        ax.text(xsize - 4, AXIS_OFFSET + TICK_LENGTH + 14, xdesc, ha="right", va="bottom", **label_kw)
    if ydesc:
        ax.text(
            AXIS_OFFSET + TICK_LENGTH + 40, ysize - 4, ydesc,
            ha="left", va="top", rotation=90, **label_kw,
        )
    if title:
        ax.text(
            xsize / 2.0, ysize - 4, title, ha="center", va="top",
            color=AXIS_COLOR, fontsize=TITLE_FONTSIZE, zorder=2, parse_math=False,
        )


def render_png(
    dataset: Dataset,
    xscale: AxisScale,
    yscale: AxisScale,
    xdesc: str = "",
    ydesc: str = "",
    title: str = "",
    marker_size: float = DEFAULT_MARKER_SIZE,
) -> bytes:
    """
    Draw ``dataset`` on a canvas of ``xscale.size`` by ``yscale.size`` pixels
    and return it PNG-encoded.

    Drawing order is background, axes with ticks, labels, then one marker per
    point in dataset order. Output carries no timestamp or version metadata,
    so identical inputs give identical bytes.
    """
    fig, ax = _new_canvas(xscale.size, yscale.size)
    buf = io.BytesIO()
    try:
        _draw_axes(ax, xscale, yscale)
        _draw_labels(ax, xscale.size, yscale.size, xdesc, ydesc, title)
        # marker size is a pixel diameter; scatter wants points squared
        diameter_pt = marker_size * 72.0 / DPI
        ax.scatter(
            xscale(dataset.x),
            yscale(dataset.y),
            s=diameter_pt ** 2,
            c=MARKER_COLOR,
            marker="o",
            linewidths=0,
            zorder=3,
            clip_on=False,
        )
        fig.savefig(buf, format="png", dpi=DPI, facecolor=BACKGROUND, metadata={"Software": None})
    except (ValueError, RuntimeError, MemoryError) as exc:
        raise RenderError(f"could not render {xscale.size}x{yscale.size} image: {exc}") from exc
    finally:
        plt.close(fig)
    return buf.getvalue()


def write_png(path: str | os.PathLike, data: bytes) -> Path:
    try:
        out = write_bytes(path, data)
    except OSError as exc:
        raise RenderError(f"cannot write '{os.fspath(path)}': {exc.strerror or exc}") from exc
    logger.info("Wrote %d bytes to %s", len(data), out)
    return out


def draw_plot(settings: PlotSettings) -> Path:
    """Load, scale, render and write one scatterplot; returns the output path."""
    dataset = load_dataset(
        settings.source, settings.x.column, settings.y.column, skip_rows=settings.skip_rows
    )
    xscale, yscale = build_scales(dataset, settings.x.size, settings.y.size)
    logger.debug(
        "x range [%g, %g] -> %d px, y range [%g, %g] -> %d px",
        xscale.lo, xscale.hi, xscale.size, yscale.lo, yscale.hi, yscale.size,
    )
    data = render_png(
        dataset,
        xscale,
        yscale,
        xdesc=settings.x.label,
        ydesc=settings.y.label,
        title=settings.title,
        marker_size=settings.marker_size,
    )
    return write_png(settings.target, data)


__all__ = ["DPI", "draw_plot", "render_png", "write_png"]
