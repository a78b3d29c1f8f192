"""Shared fixtures for generated PDF documents."""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from reportlab.pdfgen import canvas

PageSpec = Sequence[tuple[str, float, float]]


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return a factory building a PDF from ``[[(text, x, y), ...], ...]`` pages."""

    def factory(pages: Sequence[PageSpec], **info: Any) -> bytes:
        buf = io.BytesIO()
        c = canvas.Canvas(buf)
        if "title" in info:
            c.setTitle(info["title"])
        if "author" in info:
            c.setAuthor(info["author"])
        for lines in pages:
            for text, x, y in lines:
                c.drawString(x, y, text)
            c.showPage()
        c.save()
        return buf.getvalue()

    return factory
