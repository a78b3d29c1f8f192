"""JSON writer emitting the full parse result."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...walker import ParseResult

PathLikeStr = os.PathLike[str]


def write_json(path: str | PathLikeStr, result: ParseResult, *, indent: int | None = 2) -> None:
    """Write ``result.to_dict()`` to ``path`` as UTF-8 JSON."""

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=indent, default=str)
        f.write("\n")


__all__ = ["write_json"]
