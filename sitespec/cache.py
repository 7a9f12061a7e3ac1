"""Process-local memoisation for resolved content and styles.

The content store and style resolver share a :class:`ResolutionCache`. In
``production`` mode each key is computed once and reused for the lifetime of
the cache object; in ``development`` mode every lookup recomputes so edits on
disk are picked up immediately. The mode is injected rather than read from the
environment so tests control invalidation deterministically.

Examples
--------
>>> from sitespec.cache import ResolutionCache
>>> cache = ResolutionCache(mode="production")
>>> calls = []
>>> first = cache.get_or_compute("content", lambda: calls.append(1) or {"a": 1})
>>> cache.get_or_compute("content", lambda: {"b": 2}) is first
True
>>> len(calls)
1
"""

from __future__ import annotations

import logging
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sitespec.config import Mode

logger = logging.getLogger(__name__)

T = typ.TypeVar("T")


class ResolutionCache:
    """Keyed cache whose invalidation policy follows the run mode."""

    def __init__(self, mode: Mode = "production") -> None:
        self.mode: Mode = mode
        self._entries: dict[str, typ.Any] = {}

    @property
    def enabled(self) -> bool:
        """Return ``True`` when computed values are reused."""
        return self.mode != "development"

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get_or_compute(self, key: str, factory: cabc.Callable[[], T]) -> T:
        """Return the cached value for ``key``, computing it when required."""
        if self.enabled and key in self._entries:
            return typ.cast("T", self._entries[key])
        logger.debug("Computing cache entry '%s' (mode=%s)", key, self.mode)
        value = factory()
        self._entries[key] = value
        return value

    def invalidate(self, key: str | None = None) -> None:
        """Drop ``key`` (or every entry when ``key`` is ``None``)."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


__all__ = ["ResolutionCache"]
