"""Engine build backed by :mod:`pypdf`.

Text runs are captured through the ``visitor_text`` hook of
:meth:`pypdf.PageObject.extract_text`.  pypdf reports the text matrix and the
current transformation matrix separately; their product is used as the run
transform.  pypdf does not advance the text matrix across show-text operators
on one line, so ``y`` is exact but ``x`` is the position of the line start for
every fragment after the first.  pypdf already inserts its own line breaks into
the fragments it hands to the visitor.  Those are stripped so that line
reconstruction is driven by positions alone.
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import pypdf
from pypdf import PdfReader

from .base import (
    DocumentMetadata,
    TextContentOptions,
    TextRun,
    apply_text_options,
    multiply,
)

_LINE_BREAKS = str.maketrans("", "", "\r\n")

_XMP_FIELDS: tuple[tuple[str, str], ...] = (
    ("dc:title", "dc_title"),
    ("dc:creator", "dc_creator"),
    ("dc:description", "dc_description"),
    ("dc:subject", "dc_subject"),
    ("pdf:keywords", "pdf_keywords"),
    ("pdf:producer", "pdf_producer"),
    ("xmp:creatortool", "xmp_creator_tool"),
    ("xmp:createdate", "xmp_create_date"),
    ("xmp:modifydate", "xmp_modify_date"),
    ("xmp:metadatadate", "xmp_metadata_date"),
)


def _plain(value: Any) -> Any:
    """Convert pypdf objects into JSON friendly Python values."""

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return str(value)


class PypdfPage:
    """Page adapter over :class:`pypdf.PageObject`."""

    def __init__(self, page: Any, number: int) -> None:
        self._page = page
        self._number = number

    @property
    def number(self) -> int:
        return self._number

    def get_text_runs(self, options: TextContentOptions | None = None) -> Sequence[TextRun]:
        opts = options or TextContentOptions()
        runs: list[TextRun] = []

        def visitor(text: str, cm: Any, tm: Any, font_dict: Any, font_size: Any) -> None:
            fragment = text.translate(_LINE_BREAKS)
            if not fragment:
                return
            font_name = None
            if font_dict is not None:
                base_font = font_dict.get("/BaseFont")
                font_name = str(base_font).lstrip("/") if base_font is not None else None
            runs.append(
                TextRun(
                    fragment,
                    multiply(tm, cm),
                    font_name,
                    float(font_size) if font_size is not None else None,
                )
            )

        self._page.extract_text(visitor_text=visitor)
        return apply_text_options(runs, opts)


class PypdfDocument:
    """Document adapter over :class:`pypdf.PdfReader`."""

    def __init__(self, data: bytes) -> None:
        self._stream = io.BytesIO(data)
        self._reader = PdfReader(self._stream)
        if self._reader.is_encrypted:
            # Owner-password-only files open with an empty user password.
            self._reader.decrypt("")
        self._page_count = len(self._reader.pages)

    @property
    def page_count(self) -> int:
        return self._page_count

    def get_metadata(self) -> DocumentMetadata | None:
        reader = self._reader
        root = reader.trailer["/Root"].get_object()
        acro_form = root.get("/AcroForm")
        acro_form = acro_form.get_object() if acro_form is not None else None

        info: dict[str, Any] = {
            "PDFFormatVersion": reader.pdf_header.replace("%PDF-", "", 1),
            "IsAcroFormPresent": acro_form is not None,
            "IsXFAPresent": acro_form is not None and "/XFA" in acro_form,
        }
        for key, value in (reader.metadata or {}).items():
            info[str(key).lstrip("/")] = _plain(value)

        xmp = reader.xmp_metadata
        metadata: dict[str, Any] | None = None
        if xmp is not None:
            metadata = {}
            for key, attr in _XMP_FIELDS:
                value = getattr(xmp, attr)
                if value:
                    metadata[key] = _plain(value)
        return DocumentMetadata(info=info, metadata=metadata)

    def get_page(self, number: int) -> PypdfPage:
        if not 1 <= number <= self._page_count:
            raise IndexError(f"page {number} out of range 1..{self._page_count}")
        return PypdfPage(self._reader.pages[number - 1], number)

    def close(self) -> None:
        self._stream.close()


class PypdfEngine:
    """Engine opening documents with :mod:`pypdf`."""

    name = "pypdf"

    @property
    def version(self) -> str:
        return f"{self.name}/{pypdf.__version__}"

    def open_document(self, data: bytes) -> PypdfDocument:
        return PypdfDocument(data)


__all__ = ["PypdfEngine", "PypdfDocument", "PypdfPage"]
