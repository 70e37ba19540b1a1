"""Text file I/O for jogfiles (UTF-8, byte order mark tolerated)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

PathLike = Path | str


def read_text(path: PathLike, errors: str = "strict", **kwargs: Any) -> str:
    """Read path as UTF-8 text, dropping a leading BOM so it never ends up in a task name."""
    p = path if isinstance(path, Path) else Path(path)
    return p.read_text(encoding="utf-8-sig", errors=errors, **kwargs)

