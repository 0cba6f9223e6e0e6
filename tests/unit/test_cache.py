"""Tests for projroot.core.cache — per-buffer root cache."""

from __future__ import annotations

from projroot.core.cache import RootCache


def test_get_missing_is_none() -> None:
    assert RootCache().get(1) is None


def test_set_then_get() -> None:
    cache = RootCache()
    cache.set(1, "/repo")
    assert cache.get(1) == "/repo"
    assert 1 in cache
    assert len(cache) == 1


def test_invalidate_single_buffer() -> None:
    cache = RootCache()
    cache.set(1, "/a")
    cache.set(2, "/b")
    assert cache.invalidate(1) is True
    assert cache.get(1) is None
    assert cache.get(2) == "/b"


def test_invalidate_unknown_buffer() -> None:
    assert RootCache().invalidate(99) is False


def test_clear() -> None:
    cache = RootCache()
    cache.set(1, "/a")
    cache.set(2, "/b")
    cache.clear()
    assert len(cache) == 0
