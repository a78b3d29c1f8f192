"""Tests for the version keyed engine registry."""

from __future__ import annotations

import threading
import time

import pytest
from fakes import FakeEngine

from pdfscraper.engine import (
    DEFAULT_ENGINE_VERSION,
    DEFAULT_REGISTRY,
    Engine,
    EngineRegistry,
    default_registry,
)
from pdfscraper.utils.errors import EngineLoadError


def test_engine_loaded_once_and_cached() -> None:
    calls: list[int] = []

    def loader() -> FakeEngine:
        calls.append(1)
        return FakeEngine()

    registry = EngineRegistry(default_version="fake")
    registry.register("fake", loader)
    assert registry.loaded_versions() == ()
    first = registry.get("fake")
    second = registry.get("fake")
    assert first is second
    assert calls == [1]
    assert registry.loaded_versions() == ("fake",)


def test_default_alias_and_none_resolve_to_default_version() -> None:
    engine = FakeEngine()
    registry = EngineRegistry(default_version="fake")
    registry.register("fake", lambda: engine)
    assert registry.get("default") is engine
    assert registry.get(None) is engine
    assert registry.resolve_version("other") == "other"


def test_unknown_version_raises() -> None:
    registry = EngineRegistry()
    with pytest.raises(EngineLoadError, match="Unknown engine version"):
        registry.get("v1.10.100")


def test_loader_failure_raises_and_is_not_cached() -> None:
    attempts: list[int] = []

    def loader() -> FakeEngine:
        attempts.append(1)
        raise ImportError("engine missing")

    registry = EngineRegistry(default_version="broken")
    registry.register("broken", loader)
    with pytest.raises(EngineLoadError) as excinfo:
        registry.get()
    assert isinstance(excinfo.value.__cause__, ImportError)
    with pytest.raises(EngineLoadError):
        registry.get()
    assert len(attempts) == 2
    assert registry.loaded_versions() == ()


def test_registries_are_independent() -> None:
    a = EngineRegistry(default_version="fake")
    b = EngineRegistry(default_version="fake")
    a.register("fake", FakeEngine)
    b.register("fake", FakeEngine)
    assert a.get() is not b.get()


def test_default_registry_contains_builtins() -> None:
    registry = default_registry()
    assert "pypdf" in registry
    assert "pdfplumber" in registry
    assert "default" in registry
    assert "nope" not in registry
    assert registry.default_version == DEFAULT_ENGINE_VERSION
    assert registry.loaded_versions() == ()


def test_default_pypdf_engine_satisfies_protocol() -> None:
    engine = DEFAULT_REGISTRY.get("default")
    assert isinstance(engine, Engine)
    assert engine.version.startswith("pypdf/")


def test_concurrent_first_use_loads_once() -> None:
    calls: list[int] = []

    def slow_loader() -> FakeEngine:
        calls.append(1)
        time.sleep(0.05)
        return FakeEngine()

    registry = EngineRegistry(default_version="fake")
    registry.register("fake", slow_loader)

    start = threading.Barrier(8)
    seen: list[object] = []
    seen_lock = threading.Lock()

    def worker() -> None:
        start.wait()
        engine = registry.get("fake")
        with seen_lock:
            seen.append(engine)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert calls == [1]
    assert len(seen) == 8
    assert all(engine is seen[0] for engine in seen)
    assert registry.loaded_versions() == ("fake",)
