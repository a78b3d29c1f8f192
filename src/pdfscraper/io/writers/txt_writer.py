"""Plain-text writer.

The :func:`write_text` helper persists the concatenated text of a
:class:`~pdfscraper.walker.ParseResult`.  Directories required to store the
file are created automatically.  By default UTF-8 encoding without a BOM is
used and newline characters are written verbatim.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...walker import ParseResult

PathLikeStr = os.PathLike[str]


def write_text(
    path: str | PathLikeStr,
    result: ParseResult,
    *,
    encoding: str = "utf-8",
    newline: str | None = "",
) -> None:
    """Write ``result.text`` to ``path`` exactly as extracted.

    Parameters
    ----------
    path:
        Destination file path.
    result:
        Parse result whose ``text`` is written.
    encoding:
        Output encoding.  Defaults to UTF-8 without a byte-order mark.
    newline:
        ``newline`` parameter forwarded to :func:`open`.  The default of ``""``
        ensures newline characters are emitted verbatim.
    """

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding=encoding, newline=newline) as f:
        f.write(result.text)


__all__ = ["write_text"]
