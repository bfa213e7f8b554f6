
"""Utility helpers for file IO and directory management."""

from .io import ensure_dirs, read_lines, write_bytes

__all__ = ["ensure_dirs", "read_lines", "write_bytes"]
