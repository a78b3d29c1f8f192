"""Extract text from PDF documents.

The heavy lifting is done by an external PDF engine (pypdf by default).
This package opens documents through a version-keyed engine registry, walks
their pages in order and rebuilds line breaks from the vertical position of
text runs.

>>> from pdfscraper import parse
>>> result = parse(pdf_bytes, {"max_pages": 2})  # doctest: +SKIP
>>> result.numrender, result.pages[0]  # doctest: +SKIP
"""

from .config import ParseOptions, load_config, resolve_options
from .engine import DEFAULT_REGISTRY, EngineRegistry, default_registry
from .engine.base import TextContentOptions, TextRun
from .render import LineReconstructor, PageRenderer, reconstruct_lines
from .utils.errors import DocumentOpenError, EngineLoadError, PdfScraperError
from .walker import ParseResult, parse, parse_file

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "DocumentOpenError",
    "EngineLoadError",
    "EngineRegistry",
    "LineReconstructor",
    "PageRenderer",
    "ParseOptions",
    "ParseResult",
    "PdfScraperError",
    "TextContentOptions",
    "TextRun",
    "default_registry",
    "load_config",
    "parse",
    "parse_file",
    "reconstruct_lines",
    "resolve_options",
]
