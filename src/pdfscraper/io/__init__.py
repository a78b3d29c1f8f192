"""Extension based registry for file I/O.

Readers load document bytes and are keyed by input extension; only ``.pdf``
is registered by default.  Writers persist a
:class:`~pdfscraper.walker.ParseResult` and are keyed by output extension:
``.txt`` writes the concatenated text and ``.json`` the whole result.

``UnsupportedFormatError`` is raised when attempting to read or write a file
whose extension has no registered handler.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from ..utils.errors import UnsupportedFormatError
from .readers.pdf_reader import read_pdf
from .writers.json_writer import write_json
from .writers.txt_writer import write_text

if TYPE_CHECKING:
    from ..walker import ParseResult

ReaderFunc = Callable[..., bytes]
WriterFunc = Callable[..., None]

_READERS: dict[str, ReaderFunc] = {}
_WRITERS: dict[str, WriterFunc] = {}


def register_reader(ext: str, func: ReaderFunc) -> None:
    """Register a reader for files ending with ``ext``.

    Parameters
    ----------
    ext:
        File extension including the dot (e.g. ``".pdf"``).  Matching is
        case-insensitive.
    func:
        Callable that reads a file and returns its bytes.
    """

    _READERS[ext.lower()] = func


def register_writer(ext: str, func: WriterFunc) -> None:
    """Register a result writer for files ending with ``ext``."""

    _WRITERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased file extension of ``path`` (including the dot).

    Returns an empty string when the path has no extension.
    """

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_document(path: str | os.PathLike[str], **kwargs: Any) -> bytes:
    """Read ``path`` using the registered reader for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def write_result(path: str | os.PathLike[str], result: ParseResult, **kwargs: Any) -> None:
    """Write ``result`` to ``path`` using the writer for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no writer is registered for the file extension.
    """

    ext = get_extension(path)
    writer = _WRITERS.get(ext)
    if writer is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    writer(path, result, **kwargs)


register_reader(".pdf", read_pdf)
register_writer(".txt", write_text)
register_writer(".json", write_json)

__all__ = [
    "ReaderFunc",
    "WriterFunc",
    "register_reader",
    "register_writer",
    "get_extension",
    "read_document",
    "write_result",
]
