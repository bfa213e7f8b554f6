from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import UsageError

CONFIG_ENV_VAR = "GENERICPLOTTER_CONFIG"

DEFAULT_XSIZE = 800
DEFAULT_YSIZE = 600
DEFAULT_MARKER_SIZE = 4.0

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "plot": {
        "xsize": DEFAULT_XSIZE,
        "ysize": DEFAULT_YSIZE,
        "marker_size": DEFAULT_MARKER_SIZE,
        "title": "",
    },
    "input": {
        "skip_rows": 0,
    },
}


def _merge_defaults(raw: Dict[str, Any], source: str) -> Dict[str, Dict[str, Any]]:
    merged = copy.deepcopy(DEFAULTS)
    for section, values in merged.items():
        section_raw = raw.get(section)
        if section_raw is None:
            continue
        if not isinstance(section_raw, dict):
            raise UsageError(f"config file '{source}': section '{section}' must be a mapping")
        for key in values:
            if key in section_raw:
                values[key] = section_raw[key]
    return merged


def load_config(path: str | os.PathLike | None = None) -> Dict[str, Dict[str, Any]]:
    """Return built-in defaults overlaid with the YAML file at ``path``.

    When ``path`` is not given the ``GENERICPLOTTER_CONFIG`` environment
    variable is consulted; with neither, the defaults are returned as is.
    """
    cfg_path = path if path else os.getenv(CONFIG_ENV_VAR)
    if not cfg_path:
        return copy.deepcopy(DEFAULTS)
    try:
        with open(cfg_path, "r") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise UsageError(f"cannot read config file '{cfg_path}': {exc.strerror}") from exc
    except yaml.YAMLError as exc:
        raise UsageError(f"config file '{cfg_path}' is not valid YAML: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise UsageError(f"config file '{cfg_path}' must contain a mapping")
    return _merge_defaults(raw, str(cfg_path))


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise UsageError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise UsageError(f"{name} must be an integer, got {value!r}") from None


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise UsageError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise UsageError(f"{name} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class AxisConfig:
    column: int
    size: int
    label: str = ""

    def __post_init__(self):
        if self.column < 0:
            raise UsageError(f"column index must be >= 0, got {self.column}")
        if self.size < 1:
            raise UsageError(f"canvas size must be a positive number of pixels, got {self.size}")


@dataclass(frozen=True)
class PlotSettings:
    """Everything one run needs, after defaults, config file and flags are merged."""

    source: Path
    target: Path
    x: AxisConfig
    y: AxisConfig
    title: str = ""
    skip_rows: int = 0
    marker_size: float = DEFAULT_MARKER_SIZE

    def __post_init__(self):
        if self.target.suffix.lower() != ".png":
            raise UsageError(f"output file must end in .png: {self.target}")
        if self.skip_rows < 0:
            raise UsageError(f"skip_rows must be >= 0, got {self.skip_rows}")
        if self.marker_size <= 0:
            raise UsageError(f"marker size must be positive, got {self.marker_size}")


def resolve_settings(
    source: str | os.PathLike,
    target: str | os.PathLike,
    xcol: int,
    ycol: int,
    *,
    xdesc: Optional[str] = None,
    ydesc: Optional[str] = None,
    xsize: Optional[int] = None,
    ysize: Optional[int] = None,
    title: Optional[str] = None,
    skip_rows: Optional[int] = None,
    marker_size: Optional[float] = None,
    cfg: Optional[Dict[str, Dict[str, Any]]] = None,
) -> PlotSettings:
    """Merge explicit options over ``cfg`` (see :func:`load_config`); ``None`` means unset."""
    cfg = cfg if cfg is not None else load_config()
    plot_cfg = cfg["plot"]
    input_cfg = cfg["input"]

    def pick(value, fallback):
        return fallback if value is None else value

    x = AxisConfig(
        column=_as_int(xcol, "x column"),
        label=str(pick(xdesc, "")),
        size=_as_int(pick(xsize, plot_cfg["xsize"]), "xsize"),
    )
    y = AxisConfig(
        column=_as_int(ycol, "y column"),
        label=str(pick(ydesc, "")),
        size=_as_int(pick(ysize, plot_cfg["ysize"]), "ysize"),
    )
    return PlotSettings(
        source=Path(source),
        target=Path(target),
        x=x,
        y=y,
        title=str(pick(title, plot_cfg["title"]) or ""),
        skip_rows=_as_int(pick(skip_rows, input_cfg["skip_rows"]), "skip_rows"),
        marker_size=_as_float(pick(marker_size, plot_cfg["marker_size"]), "marker_size"),
    )


__all__ = [
    "AxisConfig",
    "CONFIG_ENV_VAR",
    "DEFAULTS",
    "DEFAULT_MARKER_SIZE",
    "DEFAULT_XSIZE",
    "DEFAULT_YSIZE",
    "PlotSettings",
    "load_config",
    "resolve_settings",
]
