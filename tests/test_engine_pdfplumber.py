"""Integration tests for the pdfplumber engine on generated documents."""

from __future__ import annotations

from collections.abc import Callable

import pytest

pytest.importorskip("pdfplumber", reason="'pdfplumber' extra not installed")

from pdfscraper import parse  # noqa: E402
from pdfscraper.engine.base import TextContentOptions  # noqa: E402
from pdfscraper.engine.pdfplumber_engine import PdfplumberEngine  # noqa: E402
from pdfscraper.utils.errors import DocumentOpenError  # noqa: E402


def test_line_runs_share_baseline(make_pdf: Callable[..., bytes]) -> None:
    data = make_pdf([[("Left", 72, 720), ("Right", 300, 720), ("Below", 72, 690)]])
    doc = PdfplumberEngine().open_document(data)
    try:
        words = doc.get_page(1).get_text_runs(TextContentOptions(disable_combine_text_items=True))
    finally:
        doc.close()
    ys = {r.text: r.y for r in words}
    assert ys["Left"] == ys["Right"]
    assert ys["Below"] < ys["Left"]


def test_parse_with_pdfplumber(make_pdf: Callable[..., bytes]) -> None:
    data = make_pdf([[("Hello", 72, 720), ("World", 72, 700)]], title="Plumbed")
    result = parse(data, {"engine_version": "pdfplumber"})
    assert result.pages[0].splitlines() == ["Hello", "World"]
    assert result.version is not None and result.version.startswith("pdfplumber/")
    assert result.info is not None and result.info["Title"] == "Plumbed"
    assert result.metadata is None


def test_corrupt_buffer_is_fatal() -> None:
    with pytest.raises(DocumentOpenError):
        parse(b"garbage bytes", {"engine_version": "pdfplumber"})
