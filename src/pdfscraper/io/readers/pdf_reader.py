"""PDF document reader.

:func:`read_pdf` loads the raw bytes of a PDF file.  The bytes are handed to
an engine unchanged; no validation happens here, so a corrupt file surfaces
as :class:`~pdfscraper.utils.errors.DocumentOpenError` when parsed.
``FileNotFoundError`` and other I/O errors propagate to the caller.
"""

from __future__ import annotations

import os
from pathlib import Path

PathLikeStr = os.PathLike[str]


def read_pdf(path: str | PathLikeStr) -> bytes:
    """Return the contents of the file at ``path``."""

    return Path(path).read_bytes()


__all__ = ["read_pdf"]
