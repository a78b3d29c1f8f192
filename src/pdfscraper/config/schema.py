"""Typed options schema and loaders for the pdfscraper package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, conint, field_validator

from ..engine import DEFAULT_ALIAS
from ..engine.base import TextContentOptions
from ..render import CallableRenderer, LineReconstructor, PageRenderer
from ..utils.logging import get_logger

ENV_ENGINE_VERSION = "PDFSCRAPER_ENGINE_VERSION"
ENV_MAX_PAGES = "PDFSCRAPER_MAX_PAGES"

_log = get_logger(__name__)

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class TextSettings(BaseModel):
    """Options forwarded to the engine when collecting text runs."""

    normalize_whitespace: bool = False
    disable_combine_text_items: bool = False

    model_config = ConfigDict(extra="forbid")

    def to_content_options(self) -> TextContentOptions:
        return TextContentOptions(
            normalize_whitespace=self.normalize_whitespace,
            disable_combine_text_items=self.disable_combine_text_items,
        )


class ParseOptions(BaseModel):
    """Options accepted by :func:`pdfscraper.parse`.

    ``max_pages`` of zero or less renders every page.  ``page_renderer`` may
    be a :class:`~pdfscraper.render.PageRenderer`, a plain callable taking a
    page, or ``None`` for the default line reconstructor.
    """

    page_renderer: Any = Field(default=None, exclude=True)
    max_pages: conint(strict=True) = 0  # type: ignore[valid-type]
    engine_version: str = DEFAULT_ALIAS
    text: TextSettings = Field(default_factory=TextSettings)

    model_config = ConfigDict(extra="forbid")

    @field_validator("page_renderer")
    @classmethod
    def _check_renderer(cls, value: Any) -> Any:
        if value is None or isinstance(value, PageRenderer) or callable(value):
            return value
        raise ValueError("page_renderer must be a PageRenderer or a callable")

    def renderer(self) -> PageRenderer:
        """Return the configured renderer as a :class:`PageRenderer`."""

        if self.page_renderer is None:
            return LineReconstructor(self.text.to_content_options())
        if isinstance(self.page_renderer, PageRenderer):
            return self.page_renderer
        return CallableRenderer(self.page_renderer)


# ---------------------------------------------------------------------------
# Runtime option normalization
# ---------------------------------------------------------------------------

_ALIASES: dict[str, str] = {
    "pageRenderer": "page_renderer",
    "pagerender": "page_renderer",
    "maxPages": "max_pages",
    "max": "max_pages",
    "engineVersion": "engine_version",
    "version": "engine_version",
}


def resolve_options(options: ParseOptions | Mapping[str, Any] | None = None) -> ParseOptions:
    """Return :class:`ParseOptions` built leniently from ``options``.

    Missing fields and fields of the wrong type fall back to their defaults
    instead of raising: a non-integer ``max_pages`` renders all pages, a
    non-string ``engine_version`` selects the default engine and an unusable
    ``page_renderer`` selects the line reconstructor.  Unknown keys are
    ignored.  Camel-case keys (``maxPages``, ``engineVersion``,
    ``pageRenderer``) are accepted as aliases.
    """

    if options is None:
        return ParseOptions()
    if isinstance(options, ParseOptions):
        return options
    if not isinstance(options, Mapping):
        _log.debug("ignoring options of type %s", type(options).__name__)
        return ParseOptions()

    raw = {_ALIASES.get(str(k), str(k)): v for k, v in options.items()}
    fields: dict[str, Any] = {}

    max_pages = raw.get("max_pages")
    if isinstance(max_pages, int) and not isinstance(max_pages, bool):
        fields["max_pages"] = max_pages
    elif max_pages is not None:
        _log.debug("max_pages=%r is not an integer; rendering all pages", max_pages)

    engine_version = raw.get("engine_version")
    if isinstance(engine_version, str):
        fields["engine_version"] = engine_version
    elif engine_version is not None:
        _log.debug("engine_version=%r is not a string; using default", engine_version)

    renderer = raw.get("page_renderer")
    if isinstance(renderer, PageRenderer) or callable(renderer):
        fields["page_renderer"] = renderer
    elif renderer is not None:
        _log.debug("page_renderer=%r is not callable; using line reconstructor", renderer)

    text = raw.get("text")
    if isinstance(text, TextSettings):
        fields["text"] = text
    elif isinstance(text, Mapping):
        try:
            fields["text"] = TextSettings.model_validate(dict(text))
        except ValidationError:
            _log.debug("invalid text options %r; using defaults", text)

    return ParseOptions(**fields)


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if ENV_ENGINE_VERSION in environ:
        overrides["engine_version"] = environ[ENV_ENGINE_VERSION]
    if ENV_MAX_PAGES in environ:
        raw = environ[ENV_MAX_PAGES].strip()
        try:
            overrides["max_pages"] = int(raw)
        except ValueError:
            # left as a string so validation reports it
            overrides["max_pages"] = raw
    return overrides


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ParseOptions:
    """Load options from defaults, an optional YAML file and the environment.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    ``PDFSCRAPER_ENGINE_VERSION`` / ``PDFSCRAPER_MAX_PAGES``.  Unlike
    :func:`resolve_options` validation is strict and raises
    :class:`pydantic.ValidationError` on unknown keys or bad values.
    """

    with (
        importlib_resources.files("pdfscraper.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    merged = deep_merge_dicts(merged, _env_overrides(environ))

    return ParseOptions.model_validate(merged)


__all__ = [
    "ENV_ENGINE_VERSION",
    "ENV_MAX_PAGES",
    "ParseOptions",
    "TextSettings",
    "deep_merge_dicts",
    "load_config",
    "resolve_options",
]
