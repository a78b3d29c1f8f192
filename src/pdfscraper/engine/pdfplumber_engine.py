"""Engine build backed by :mod:`pdfplumber`.

pdfplumber measures positions from the top of the page.  Runs are converted
to PDF user space (origin bottom-left) by taking ``page.height - bottom`` as
the vertical translation, so runs on one visual line share ``y``.

pdfplumber groups characters into words and lines itself.  When combining is
enabled each text line becomes one run; otherwise each word is a run.
"""

from __future__ import annotations

import io
import re
from collections.abc import Sequence
from typing import Any

import pdfplumber
from pdfminer.pdftypes import resolve1

from .base import DocumentMetadata, TextContentOptions, TextRun, normalize_whitespace

_HEADER_RE = re.compile(rb"%PDF-(\d+\.\d+)")


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return str(value)


class PdfplumberPage:
    """Page adapter over :class:`pdfplumber.page.Page`."""

    def __init__(self, page: Any, number: int) -> None:
        self._page = page
        self._number = number

    @property
    def number(self) -> int:
        return self._number

    def get_text_runs(self, options: TextContentOptions | None = None) -> Sequence[TextRun]:
        opts = options or TextContentOptions()
        height = float(self._page.height)
        if opts.disable_combine_text_items:
            items = self._page.extract_words(keep_blank_chars=True, use_text_flow=True)
        else:
            items = self._page.extract_text_lines(return_chars=False)

        runs: list[TextRun] = []
        for item in items:
            text = item["text"]
            if opts.normalize_whitespace:
                text = normalize_whitespace(text)
            transform = (1.0, 0.0, 0.0, 1.0, float(item["x0"]), height - float(item["bottom"]))
            runs.append(TextRun(text, transform))
        return runs


class PdfplumberDocument:
    """Document adapter over :class:`pdfplumber.pdf.PDF`."""

    def __init__(self, data: bytes) -> None:
        self._header = data[:1024]
        self._pdf = pdfplumber.open(io.BytesIO(data))
        try:
            self._page_count = len(self._pdf.pages)
        except Exception:
            self._pdf.close()
            raise

    @property
    def page_count(self) -> int:
        return self._page_count

    def get_metadata(self) -> DocumentMetadata | None:
        catalog = self._pdf.doc.catalog
        acro_form = resolve1(catalog.get("AcroForm"))
        match = _HEADER_RE.search(self._header)

        info: dict[str, Any] = {
            "PDFFormatVersion": match.group(1).decode("ascii") if match else None,
            "IsAcroFormPresent": acro_form is not None,
            "IsXFAPresent": isinstance(acro_form, dict) and "XFA" in acro_form,
        }
        for key, value in self._pdf.metadata.items():
            info[str(key)] = _plain(value)
        return DocumentMetadata(info=info, metadata=None)

    def get_page(self, number: int) -> PdfplumberPage:
        if not 1 <= number <= self._page_count:
            raise IndexError(f"page {number} out of range 1..{self._page_count}")
        return PdfplumberPage(self._pdf.pages[number - 1], number)

    def close(self) -> None:
        self._pdf.close()


class PdfplumberEngine:
    """Engine opening documents with :mod:`pdfplumber`."""

    name = "pdfplumber"

    @property
    def version(self) -> str:
        return f"{self.name}/{pdfplumber.__version__}"

    def open_document(self, data: bytes) -> PdfplumberDocument:
        return PdfplumberDocument(data)


__all__ = ["PdfplumberEngine", "PdfplumberDocument", "PdfplumberPage"]
