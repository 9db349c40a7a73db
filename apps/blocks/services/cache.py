"""Memoization of placement results on top of Django's cache framework.

Every entry belongs to a named group. Each group has a generation token
stored under ``<group>:generation``; entry keys embed the token that was
current when the lookup started. Invalidating the group swaps the token, so
older entries simply become unreachable and expire on their own. A reader
therefore sees one generation or the other, never a mixture.

Backend errors never reach the caller: lookups fall back to computing the
value directly.
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from typing import Any, Callable, Hashable, Optional

from django.core.cache import caches

from apps.blocks.conf import settings

logger = logging.getLogger(__name__)

__all__ = ["ResultCache", "clear_cache"]

_MISSING = object()


class ResultCache:
    """Keyed memoization store with group-scoped invalidation."""

    def __init__(
        self,
        group: Optional[str] = None,
        *,
        alias: Optional[str] = None,
        timeout: Optional[int] = _MISSING,  # type: ignore[assignment]
    ) -> None:
        self.group = group or settings.BLOCKS_CACHE_GROUP
        self.alias = alias or settings.BLOCKS_CACHE_ALIAS
        self.timeout = settings.BLOCKS_CACHE_TIMEOUT if timeout is _MISSING else timeout

    def __repr__(self) -> str:
        return f"ResultCache(group={self.group!r}, alias={self.alias!r})"

    @property
    def backend(self):
        return caches[self.alias]

    @property
    def generation_key(self) -> str:
        return f"{self.group}:generation"

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------
    def _generation(self) -> str:
        backend = self.backend
        token = backend.get(self.generation_key)
        if token is None:
            backend.add(self.generation_key, uuid.uuid4().hex, None)
            token = backend.get(self.generation_key)
            if token is None:
                raise RuntimeError(f"Cache alias {self.alias!r} did not keep the generation token")
        return token

    def make_key(self, key: Hashable, generation: str) -> str:
        digest = hashlib.sha256(repr(key).encode("utf-8")).hexdigest()
        return f"{self.group}:{generation}:{digest}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get(self, key: Hashable, default: Any = None) -> Any:
        try:
            value = self.backend.get(self.make_key(key, self._generation()), _MISSING)
        except Exception as exc:
            logger.warning("Block cache read failed for %r: %s", key, exc)
            return default
        return default if value is _MISSING else value

    def set(self, key: Hashable, value: Any) -> None:
        try:
            self.backend.set(self.make_key(key, self._generation()), value, self.timeout)
        except Exception as exc:
            logger.warning("Block cache write failed for %r: %s", key, exc)

    def get_or_set(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or store ``compute()``.

        The generation is read once, before computing, so a value computed
        from data that changed mid-way lands in a generation that has
        already been retired.
        """

        try:
            cache_key = self.make_key(key, self._generation())
            value = self.backend.get(cache_key, _MISSING)
        except Exception as exc:
            logger.warning("Block cache unavailable, computing %r directly: %s", key, exc)
            return compute()

        if value is not _MISSING:
            return value

        value = compute()
        try:
            self.backend.set(cache_key, value, self.timeout)
        except Exception as exc:
            logger.warning("Block cache write failed for %r: %s", key, exc)
        return value

    def invalidate(self) -> None:
        """Drop every entry of the group."""

        try:
            self.backend.set(self.generation_key, uuid.uuid4().hex, None)
        except Exception:
            logger.exception("Could not invalidate block cache group %r", self.group)
        else:
            logger.debug("Invalidated block cache group %r", self.group)


def clear_cache() -> None:
    """Clear cached block listings and visibility decisions for all themes."""

    ResultCache().invalidate()
