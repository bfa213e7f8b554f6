from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Tuple

import numpy as np
import pandas as pd

from ..errors import DataError
from ..utils.io import read_lines

logger = logging.getLogger(__name__)


class DataPoint(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True, eq=False)
class Dataset:
    """Selected X/Y values of every data row, in file order."""

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        if len(self.x) != len(self.y):
            raise ValueError(f"x and y lengths differ: {len(self.x)} != {len(self.y)}")

    def __len__(self) -> int:
        return len(self.x)

    def __iter__(self) -> Iterator[DataPoint]:
        for xv, yv in zip(self.x, self.y):
            yield DataPoint(float(xv), float(yv))

    @property
    def x_range(self) -> Tuple[float, float]:
        return float(self.x.min()), float(self.x.max())

    @property
    def y_range(self) -> Tuple[float, float]:
        return float(self.y.min()), float(self.y.max())


def _select_fields(
    lines: List[str], source: str, xcol: int, ycol: int, skip_rows: int
) -> pd.DataFrame:
    needed = max(xcol, ycol) + 1
    line_nos: List[int] = []
    xs: List[str] = []
    ys: List[str] = []
    for lineno, line in enumerate(lines, start=1):
        if lineno <= skip_rows:
            continue
        fields = line.split()
        if not fields:
            continue
        if len(fields) < needed:
            raise DataError(
                f"{source}:{lineno}: expected at least {needed} fields, found {len(fields)}"
            )
        line_nos.append(lineno)
        xs.append(fields[xcol])
        ys.append(fields[ycol])
    return pd.DataFrame({"line": line_nos, "x": xs, "y": ys}, dtype=object)


def _coerce_column(frame: pd.DataFrame, axis: str) -> Tuple[np.ndarray, int]:
    """Parse one selected column; returns the values and the first bad row (-1 if none)."""
    parsed = pd.to_numeric(frame[axis], errors="coerce").astype(float).to_numpy()
    bad = np.flatnonzero(~np.isfinite(parsed))
    return parsed, int(bad[0]) if len(bad) else -1


def load_dataset(
    path: str | os.PathLike, xcol: int, ycol: int, skip_rows: int = 0
) -> Dataset:
    """Read ``path`` and return columns ``xcol``/``ycol`` (0-based) of every data row.

    Blank lines and the first ``skip_rows`` lines are ignored. Any other
    malformed row aborts the whole load with :class:`DataError`.
    """
    source = os.fspath(path)
    try:
        lines = read_lines(path)
    except OSError as exc:
        raise DataError(f"cannot read '{source}': {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise DataError(f"cannot read '{source}': not a UTF-8 text file") from exc

    frame = _select_fields(lines, source, xcol, ycol, skip_rows)
    if frame.empty:
        raise DataError(f"{source}: no data rows found")

    x, bad_x = _coerce_column(frame, "x")
    y, bad_y = _coerce_column(frame, "y")
    failures = [(row, axis, col) for row, axis, col in ((bad_x, "x", xcol), (bad_y, "y", ycol)) if row >= 0]
    if failures:
        row, axis, col = min(failures)
        raise DataError(
            f"{source}:{frame['line'].iat[row]}: column {col} value "
            f"{frame[axis].iat[row]!r} is not a finite number"
        )

    logger.info("Loaded %d rows from %s (x=column %d, y=column %d)", len(frame), source, xcol, ycol)
    return Dataset(x=x, y=y)


__all__ = ["DataPoint", "Dataset", "load_dataset"]
