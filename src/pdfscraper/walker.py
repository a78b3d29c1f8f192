"""Document walker: open a PDF, render its pages and assemble the result.

Pages are processed strictly in order, one at a time.  Engine loading and
document opening are fatal: their errors propagate to the caller.  Metadata
and per-page failures are recovered locally.  A failed page contributes an
empty string to :attr:`ParseResult.pages` and its error is recorded in
:attr:`ParseResult.page_errors`, so a failed page can be told apart from a
page that legitimately has no text.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .config import ParseOptions, resolve_options
from .engine import DEFAULT_REGISTRY, EngineRegistry
from .engine.base import Document
from .io import read_document
from .render import PageRenderer
from .utils.errors import DocumentOpenError
from .utils.logging import get_logger

PAGE_SEPARATOR = "\n\n"

_log = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class PageText:
    """Text of one rendered page; ``error`` is set when rendering failed."""

    number: int
    text: str
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(slots=True)
class ParseResult:
    """Outcome of :func:`parse`."""

    numpages: int = 0
    pages: list[str] = field(default_factory=list)
    numrender: int = 0
    info: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    text: str = ""
    version: str | None = None
    page_errors: dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the result as plain data suitable for JSON."""

        data = asdict(self)
        data["page_errors"] = {str(k): v for k, v in self.page_errors.items()}
        return data


def pages_to_render(page_count: int, max_pages: int) -> int:
    """Return how many leading pages to render given a ``max_pages`` limit."""

    limit = max_pages if max_pages > 0 else page_count
    return min(limit, page_count)


def iter_pages(document: Document, renderer: PageRenderer, count: int) -> Iterator[PageText]:
    """Yield the text of pages ``1..count`` lazily and in order.

    Any exception raised while fetching or rendering a page is caught and
    reported through :attr:`PageText.error`; iteration continues with the
    next page.
    """

    for number in range(1, count + 1):
        try:
            page = document.get_page(number)
            text = renderer.render(page)
            if not isinstance(text, str):
                raise TypeError(f"renderer returned {type(text).__name__}, expected str")
        except Exception as exc:
            _log.warning("page %d failed to render: %s", number, exc)
            yield PageText(number, "", f"{type(exc).__name__}: {exc}")
            continue
        yield PageText(number, text)


def _read_metadata(document: Document) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    try:
        meta = document.get_metadata()
    except Exception as exc:
        _log.debug("metadata unavailable: %s", exc)
        return None, None
    if meta is None:
        return None, None
    return meta.info, meta.metadata


def parse(
    data: bytes,
    options: ParseOptions | Mapping[str, Any] | None = None,
    *,
    registry: EngineRegistry | None = None,
) -> ParseResult:
    """Extract text from the PDF in ``data``.

    Parameters
    ----------
    data:
        Raw bytes of a PDF document.
    options:
        :class:`~pdfscraper.config.ParseOptions` or a mapping of option
        values.  Mappings are normalized leniently, see
        :func:`~pdfscraper.config.resolve_options`.
    registry:
        Engine registry to take the engine from.  Defaults to the
        process-wide :data:`~pdfscraper.engine.DEFAULT_REGISTRY`.

    Raises
    ------
    EngineLoadError
        If the requested engine version cannot be loaded.
    DocumentOpenError
        If the engine cannot open ``data``.
    """

    opts = resolve_options(options)
    engines = registry if registry is not None else DEFAULT_REGISTRY
    engine = engines.get(opts.engine_version)
    renderer = opts.renderer()

    try:
        document = engine.open_document(bytes(data))
    except Exception as exc:
        raise DocumentOpenError(f"{engine.version} could not open document: {exc}") from exc

    result = ParseResult(version=engine.version)
    try:
        result.numpages = document.page_count
        result.info, result.metadata = _read_metadata(document)
        count = pages_to_render(result.numpages, opts.max_pages)
        _log.debug("rendering %d of %d pages with %s", count, result.numpages, engine.version)

        text_parts: list[str] = []
        for page in iter_pages(document, renderer, count):
            result.pages.append(page.text)
            text_parts.append(PAGE_SEPARATOR + page.text)
            if page.error is not None:
                result.page_errors[page.number] = page.error
        result.text = "".join(text_parts)
        result.numrender = count
    finally:
        document.close()

    return result


def parse_file(
    path: str | os.PathLike[str],
    options: ParseOptions | Mapping[str, Any] | None = None,
    *,
    registry: EngineRegistry | None = None,
) -> ParseResult:
    """Read the PDF at ``path`` and :func:`parse` it."""

    return parse(read_document(Path(path)), options, registry=registry)


__all__ = [
    "PAGE_SEPARATOR",
    "PageText",
    "ParseResult",
    "iter_pages",
    "pages_to_render",
    "parse",
    "parse_file",
]
