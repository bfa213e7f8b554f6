"""Scatterplot two columns of a whitespace-separated data file to PNG."""

__version__ = "0.2.0"

__all__ = ["__version__"]
