"""Tests for mode-driven cache invalidation."""

from __future__ import annotations

from sitespec.cache import ResolutionCache


def test_production_cache_reuses_values() -> None:
    cache = ResolutionCache("production")
    calls: list[int] = []

    def factory() -> list[int]:
        calls.append(1)
        return [len(calls)]

    assert cache.get_or_compute("k", factory) == [1]
    assert cache.get_or_compute("k", factory) == [1]
    assert len(calls) == 1, "production cache should compute once"
    assert "k" in cache


def test_development_cache_recomputes() -> None:
    cache = ResolutionCache("development")
    values = iter([1, 2])

    assert cache.get_or_compute("k", lambda: next(values)) == 1
    assert cache.get_or_compute("k", lambda: next(values)) == 2
    assert not cache.enabled


def test_invalidate_single_key_and_everything() -> None:
    cache = ResolutionCache()
    cache.get_or_compute("a", lambda: 1)
    cache.get_or_compute("b", lambda: 2)

    cache.invalidate("a")
    assert "a" not in cache
    assert "b" in cache

    cache.invalidate()
    assert "b" not in cache, "invalidate() without a key should clear all entries"
