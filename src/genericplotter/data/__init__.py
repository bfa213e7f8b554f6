
"""Data ingestion for whitespace-separated numeric files."""

from .loader import Dataset, DataPoint, load_dataset

__all__ = ["Dataset", "DataPoint", "load_dataset"]
