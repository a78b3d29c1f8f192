"""In-memory fake engine, documents and pages for walker tests."""

from __future__ import annotations

from collections.abc import Sequence

from pdfscraper.engine import EngineRegistry
from pdfscraper.engine.base import DocumentMetadata, TextContentOptions, TextRun


def run(text: str, y: float, x: float = 0.0) -> TextRun:
    return TextRun(text, (1.0, 0.0, 0.0, 1.0, x, y))


class FakePage:
    def __init__(self, number: int, runs: Sequence[TextRun]) -> None:
        self._number = number
        self.runs = list(runs)
        self.seen_options: TextContentOptions | None = None

    @property
    def number(self) -> int:
        return self._number

    def get_text_runs(self, options: TextContentOptions | None = None) -> Sequence[TextRun]:
        self.seen_options = options
        return self.runs


class FakeDocument:
    def __init__(
        self,
        pages: Sequence[Sequence[TextRun]],
        *,
        metadata: DocumentMetadata | None = None,
        metadata_error: Exception | None = None,
    ) -> None:
        self.pages = [FakePage(i + 1, runs) for i, runs in enumerate(pages)]
        self.metadata = metadata
        self.metadata_error = metadata_error
        self.closed = False
        self.requested: list[int] = []

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def get_metadata(self) -> DocumentMetadata | None:
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.metadata

    def get_page(self, number: int) -> FakePage:
        self.requested.append(number)
        return self.pages[number - 1]

    def close(self) -> None:
        self.closed = True


class FakeEngine:
    name = "fake"

    def __init__(
        self, document: FakeDocument | None = None, open_error: Exception | None = None
    ) -> None:
        self.document = document
        self.open_error = open_error
        self.opened: list[bytes] = []

    @property
    def version(self) -> str:
        return "fake/1.0"

    def open_document(self, data: bytes) -> FakeDocument:
        self.opened.append(data)
        if self.open_error is not None:
            raise self.open_error
        assert self.document is not None
        return self.document


def fake_registry(engine: FakeEngine, version: str = "fake") -> EngineRegistry:
    registry = EngineRegistry(default_version=version)
    registry.register(version, lambda: engine)
    return registry


def text_pages(*texts: str) -> FakeDocument:
    """Return a document with one run per page at a fixed height."""

    return FakeDocument([[run(t, 700.0)] if t else [] for t in texts])
