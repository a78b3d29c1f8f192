"""Engine-facing data model and protocol definitions.

The PDF engine is an external collaborator.  This module pins down the narrow
surface the rest of the package relies on: an :class:`Engine` opens raw bytes
into a :class:`Document`, documents hand out 1-based :class:`Page` objects and
pages produce :class:`TextRun` fragments.  Concrete engines adapt third-party
libraries to these protocols; nothing here parses PDF data.

Transforms follow the PDF affine matrix convention ``(a, b, c, d, e, f)``
where ``e`` and ``f`` are the horizontal and vertical translation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

Matrix = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

_WHITESPACE_RE = re.compile(r"\s")


@dataclass(slots=True, frozen=True)
class TextRun:
    """A fragment of page text with its position transform."""

    text: str
    transform: Matrix = IDENTITY
    font_name: str | None = None
    font_size: float | None = None

    def __post_init__(self) -> None:  # noqa: D401 - simple validation
        if len(self.transform) != 6:
            raise ValueError("transform must have exactly six components")

    @property
    def x(self) -> float:
        """Return the horizontal translation of the run."""

        return self.transform[4]

    @property
    def y(self) -> float:
        """Return the vertical translation of the run."""

        return self.transform[5]


@dataclass(slots=True, frozen=True)
class TextContentOptions:
    """Options forwarded to :meth:`Page.get_text_runs`.

    Attributes
    ----------
    normalize_whitespace:
        Replace every whitespace character in run text with a plain space.
    disable_combine_text_items:
        Keep runs exactly as the engine reports them instead of merging
        consecutive runs that sit on the same line.
    """

    normalize_whitespace: bool = False
    disable_combine_text_items: bool = False


@dataclass(slots=True)
class DocumentMetadata:
    """Document information dictionary and optional XMP metadata."""

    info: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] | None = None


@runtime_checkable
class Page(Protocol):
    """A single page of an opened document."""

    @property
    def number(self) -> int:
        """Return the 1-based page number."""

        ...

    def get_text_runs(self, options: TextContentOptions | None = None) -> Sequence[TextRun]:
        """Return the text runs of the page in content-stream order."""

        ...


@runtime_checkable
class Document(Protocol):
    """An opened document owning engine resources until :meth:`close`."""

    @property
    def page_count(self) -> int:
        """Return the total number of pages."""

        ...

    def get_metadata(self) -> DocumentMetadata | None:
        """Return document metadata; may raise on malformed dictionaries."""

        ...

    def get_page(self, number: int) -> Page:
        """Return page ``number`` (1-based)."""

        ...

    def close(self) -> None:
        """Release resources held by the document."""

        ...


@runtime_checkable
class Engine(Protocol):
    """Entry point of a PDF engine build."""

    name: str

    @property
    def version(self) -> str:
        """Return an identifier of the engine build, e.g. ``"pypdf/5.1.0"``."""

        ...

    def open_document(self, data: bytes) -> Document:
        """Open ``data`` as a PDF document."""

        ...


def multiply(m1: Sequence[float], m2: Sequence[float]) -> Matrix:
    """Return the product ``m1 x m2`` of two affine matrices."""

    a1, b1, c1, d1, e1, f1 = (float(v) for v in m1)
    a2, b2, c2, d2, e2, f2 = (float(v) for v in m2)
    return (
        a1 * a2 + b1 * c2,
        a1 * b2 + b1 * d2,
        c1 * a2 + d1 * c2,
        c1 * b2 + d1 * d2,
        e1 * a2 + f1 * c2 + e2,
        e1 * b2 + f1 * d2 + f2,
    )


def normalize_whitespace(text: str) -> str:
    """Replace each whitespace character in ``text`` with U+0020."""

    return _WHITESPACE_RE.sub(" ", text)


def combine_runs(runs: Iterable[TextRun]) -> list[TextRun]:
    """Merge consecutive runs that share a vertical coordinate.

    The merged run keeps the transform and font of the first run in the
    group.  Text is concatenated without separators.
    """

    combined: list[TextRun] = []
    for run in runs:
        if combined and combined[-1].y == run.y:
            head = combined[-1]
            combined[-1] = TextRun(head.text + run.text, head.transform, head.font_name, head.font_size)
        else:
            combined.append(run)
    return combined


def apply_text_options(runs: Iterable[TextRun], options: TextContentOptions) -> list[TextRun]:
    """Apply ``options`` to engine runs, returning a new list."""

    result = list(runs)
    if options.normalize_whitespace:
        result = [
            TextRun(normalize_whitespace(r.text), r.transform, r.font_name, r.font_size) for r in result
        ]
    if not options.disable_combine_text_items:
        result = combine_runs(result)
    return result


__all__ = [
    "Matrix",
    "IDENTITY",
    "TextRun",
    "TextContentOptions",
    "DocumentMetadata",
    "Page",
    "Document",
    "Engine",
    "multiply",
    "normalize_whitespace",
    "combine_runs",
    "apply_text_options",
]
