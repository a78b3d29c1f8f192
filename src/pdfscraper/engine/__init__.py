"""Version keyed registry of PDF engine builds.

An :class:`EngineRegistry` maps version identifiers to loader callables.  The
engine for a version is created lazily on first :meth:`EngineRegistry.get`
and cached for the lifetime of the registry; entries are never evicted.
Callers own their registry and may pass it to :func:`pdfscraper.parse`, which
makes it straightforward to plug in fake engines under test.
``DEFAULT_REGISTRY`` serves calls that do not supply one.

Built-in versions:

``"pypdf"``
    Default engine, see :mod:`pdfscraper.engine.pypdf_engine`.
``"pdfplumber"``
    Alternative engine, see :mod:`pdfscraper.engine.pdfplumber_engine`.

The alias ``"default"`` resolves to :data:`DEFAULT_ENGINE_VERSION`.
"""

from __future__ import annotations

import importlib
import threading
from typing import Callable

from ..utils.errors import EngineLoadError
from ..utils.logging import get_logger
from .base import Document, DocumentMetadata, Engine, Page, TextContentOptions, TextRun

DEFAULT_ENGINE_VERSION = "pypdf"
DEFAULT_ALIAS = "default"

EngineLoader = Callable[[], Engine]

_log = get_logger(__name__)

_BUILTINS: dict[str, tuple[str, str]] = {
    "pypdf": ("pdfscraper.engine.pypdf_engine", "PypdfEngine"),
    "pdfplumber": ("pdfscraper.engine.pdfplumber_engine", "PdfplumberEngine"),
}


def _import_loader(module_name: str, class_name: str) -> EngineLoader:
    def load() -> Engine:
        module = importlib.import_module(module_name)
        engine_cls = getattr(module, class_name)
        return engine_cls()

    return load


class EngineRegistry:
    """Lazily populated, write-once cache of engines keyed by version."""

    def __init__(self, default_version: str = DEFAULT_ENGINE_VERSION) -> None:
        self.default_version = default_version
        self._loaders: dict[str, EngineLoader] = {}
        self._engines: dict[str, Engine] = {}
        self._lock = threading.Lock()

    def register(self, version: str, loader: EngineLoader) -> None:
        """Register ``loader`` for ``version``.

        Re-registering a version that has already been loaded has no effect on
        the cached engine.
        """

        self._loaders[version] = loader

    def resolve_version(self, version: str | None) -> str:
        """Map ``None`` and the ``"default"`` alias to the default version."""

        if version is None or version == DEFAULT_ALIAS:
            return self.default_version
        return version

    def get(self, version: str | None = None) -> Engine:
        """Return the engine for ``version`` loading it on first use.

        Raises
        ------
        EngineLoadError
            If no loader is registered for the version or loading fails.
        """

        key = self.resolve_version(version)
        engine = self._engines.get(key)
        if engine is not None:
            return engine

        with self._lock:
            engine = self._engines.get(key)
            if engine is not None:
                return engine
            loader = self._loaders.get(key)
            if loader is None:
                raise EngineLoadError(f"Unknown engine version: '{key}'") from None
            try:
                engine = loader()
            except Exception as exc:
                raise EngineLoadError(f"Failed to load engine '{key}': {exc}") from exc
            self._engines[key] = engine
        _log.debug("loaded engine %s as %s", key, engine.version)
        return engine

    def loaded_versions(self) -> tuple[str, ...]:
        """Return the versions whose engines have been loaded so far."""

        return tuple(self._engines)

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, str):
            return False
        return self.resolve_version(version) in self._loaders


def default_registry() -> EngineRegistry:
    """Return a fresh registry with the built-in engines registered."""

    registry = EngineRegistry()
    for version, (module_name, class_name) in _BUILTINS.items():
        registry.register(version, _import_loader(module_name, class_name))
    return registry


DEFAULT_REGISTRY = default_registry()

__all__ = [
    "DEFAULT_ALIAS",
    "DEFAULT_ENGINE_VERSION",
    "DEFAULT_REGISTRY",
    "Document",
    "DocumentMetadata",
    "Engine",
    "EngineLoader",
    "EngineRegistry",
    "Page",
    "TextContentOptions",
    "TextRun",
    "default_registry",
]
