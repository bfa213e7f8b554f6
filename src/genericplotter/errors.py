from __future__ import annotations


class PlotterError(Exception):
    """Base class for failures that end a run with a message and exit code."""

    exit_code = 1


class UsageError(PlotterError):
    exit_code = 2


class DataError(PlotterError):
    exit_code = 3


class RenderError(PlotterError):
    exit_code = 4


__all__ = ["PlotterError", "UsageError", "DataError", "RenderError"]
