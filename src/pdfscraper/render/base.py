"""Page renderer protocol and adapters.

A :class:`PageRenderer` turns one engine :class:`~pdfscraper.engine.base.Page`
into text.  The document walker depends on this protocol only, so alternative
extraction strategies can be substituted without touching the walker.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from ..engine.base import Page


@runtime_checkable
class PageRenderer(Protocol):
    """Protocol for page renderers."""

    def render(self, page: Page) -> str:
        """Return the text of ``page``."""

        ...


class CallableRenderer:
    """Adapt a plain ``Page -> str`` function to :class:`PageRenderer`."""

    def __init__(self, func: Callable[[Page], str]) -> None:
        self.func = func

    def render(self, page: Page) -> str:
        return self.func(page)

    def __repr__(self) -> str:
        return f"CallableRenderer({self.func!r})"


__all__ = ["PageRenderer", "CallableRenderer"]
