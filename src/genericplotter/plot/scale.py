from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from matplotlib.ticker import MaxNLocator

from ..data.loader import Dataset


@dataclass(frozen=True)
class AxisScale:
    """
    Linear map from the observed range ``[lo, hi]`` onto ``[0, size]`` pixels.

    Pixels are measured from the bottom-left corner of the canvas. A constant
    column (``lo == hi``) puts every value on the canvas midpoint.
    """

    lo: float
    hi: float
    size: int

    def __post_init__(self):
        if self.hi < self.lo:
            raise ValueError(f"empty range: lo={self.lo} > hi={self.hi}")

    @property
    def degenerate(self) -> bool:
        return self.hi == self.lo

    def __call__(self, value):
        values = np.asarray(value, dtype=float)
        if self.degenerate:
            pixels = np.full_like(values, self.size / 2.0)
        else:
            # halved operands keep hi - lo finite for ranges near the float limits
            half_span = self.hi / 2.0 - self.lo / 2.0
            pixels = (values / 2.0 - self.lo / 2.0) / half_span * self.size
        if pixels.ndim == 0:
            return float(pixels)
        return pixels

    def ticks(self, max_ticks: int = 5) -> List[Tuple[float, float]]:
        """Round tick values inside ``[lo, hi]`` paired with their pixel positions."""
        if self.degenerate:
            return [(self.lo, self.size / 2.0)]
        if not np.isfinite(self.hi - self.lo):
            # MaxNLocator cannot step across an overflowing span
            return [(self.lo, self(self.lo)), (self.hi, self(self.hi))]
        locator = MaxNLocator(nbins=max_ticks, steps=[1, 2, 2.5, 5, 10])
        values = [float(v) for v in locator.tick_values(self.lo, self.hi)]
        # the locator pads outwards; keep what is actually on the canvas
        span = self.hi - self.lo
        eps = span * 1e-9
        inside = [v for v in values if self.lo - eps <= v <= self.hi + eps]
        return [(v, self(v)) for v in inside]


def build_scales(dataset: Dataset, xsize: int, ysize: int) -> Tuple[AxisScale, AxisScale]:
    if len(dataset) == 0:
        raise ValueError("cannot scale an empty dataset")
    xlo, xhi = dataset.x_range
    ylo, yhi = dataset.y_range
    return AxisScale(xlo, xhi, xsize), AxisScale(ylo, yhi, ysize)


__all__ = ["AxisScale", "build_scales"]
