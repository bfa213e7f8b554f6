from __future__ import annotations

import os
from pathlib import Path
from typing import List


def ensure_dirs(*dirs: Path) -> None:
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)


def read_lines(path: str | os.PathLike) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def write_bytes(path: str | os.PathLike, data: bytes) -> Path:
    out = Path(path)
    ensure_dirs(out.parent)
    with open(out, "wb") as f:
        f.write(data)
    return out


__all__ = ["ensure_dirs", "read_lines", "write_bytes"]
