"""Line reconstruction from positioned text runs.

PDF content streams carry no line-break markers for flowed text.  Line breaks
are recovered by watching the vertical coordinate of consecutive runs: a run
whose ``y`` differs from the previous run starts a new line.  Coordinates are
compared exactly, without tolerance, and horizontal gaps never split a line.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..engine.base import Page, TextContentOptions, TextRun


def reconstruct_lines(runs: Iterable[TextRun]) -> str:
    """Join ``runs`` into text, inserting ``"\\n"`` where ``y`` changes."""

    parts: list[str] = []
    last_y: float | None = None
    for run in runs:
        if last_y is not None and run.y != last_y:
            parts.append("\n")
        parts.append(run.text)
        last_y = run.y
    return "".join(parts)


class LineReconstructor:
    """Default :class:`~pdfscraper.render.base.PageRenderer`."""

    def __init__(self, text_options: TextContentOptions | None = None) -> None:
        self.text_options = text_options or TextContentOptions()

    def render(self, page: Page) -> str:
        return reconstruct_lines(page.get_text_runs(self.text_options))

    def __repr__(self) -> str:
        return f"LineReconstructor({self.text_options!r})"


__all__ = ["reconstruct_lines", "LineReconstructor"]
