"""In-memory LRU cache with TTL support and async safety."""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from typing import Any

from tiered_context.context.cache.key_strategy import target_key_prefix, user_key_prefix
from tiered_context.context.models import CacheEntry

log = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class MemoryCache:
    """OrderedDict-based LRU cache with TTL expiry.

    Safe for concurrent coroutine access via ``asyncio.Lock``.
    """

    def __init__(self, max_entries: int = 1000, default_ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._max_entries = max_entries
        self._default_ttl = default_ttl_seconds
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = asyncio.Lock()
        self.hits = 0
        self.misses = 0

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key. Returns None on miss or TTL expiry."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None or entry.is_expired:
                if entry is not None:
                    del self._store[key]
                self.misses += 1
                return None
            entry.hit_count += 1
            self.hits += 1
            # Move to end (most recently used)
            self._store.move_to_end(key)
            return entry.value

    async def put(self, key: str, value: Any, *, ttl_seconds: int = 0) -> None:
        """Store a value; ``ttl_seconds=0`` uses the cache default. Evicts LRU entries at capacity."""
        async with self._lock:
            self._store.pop(key, None)
            self._store[key] = CacheEntry(
                key=key,
                value=value,
                ttl_seconds=ttl_seconds or self._default_ttl,
            )

            while len(self._store) > self._max_entries:
                evicted, _ = self._store.popitem(last=False)
                log.debug("Evicted LRU cache entry %s", evicted)

    async def invalidate(self, key: str) -> None:
        async with self._lock:
            self._store.pop(key, None)

    async def invalidate_user(self, user_id: str) -> int:
        removed = await self._delete_prefix(user_key_prefix(user_id))
        log.debug("Invalidated %d cache entries for user %s", removed, user_id)
        return removed

    async def invalidate_target(self, user_id: str, target_id: str) -> int:
        return await self._delete_prefix(target_key_prefix(user_id, target_id))

    async def entries_for_user(self, user_id: str) -> list[tuple[str, Any]]:
        """Unexpired entries of *user_id*; does not touch LRU order or hit counts."""
        prefix = user_key_prefix(user_id)
        async with self._lock:
            return [(k, e.value) for k, e in self._store.items() if k.startswith(prefix) and not e.is_expired]

    async def _delete_prefix(self, prefix: str) -> int:
        async with self._lock:
            doomed = [k for k in self._store if k.startswith(prefix)]
            for key in doomed:
                del self._store[key]
        return len(doomed)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    async def purge_expired(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        async with self._lock:
            expired = [k for k, e in self._store.items() if e.is_expired]
            for key in expired:
                del self._store[key]
        return len(expired)

    def stats(self) -> dict[str, Any]:
        lookups = self.hits + self.misses
        return {
            "entries": len(self._store),
            "max_entries": self._max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups, 4) if lookups else 0.0,
        }
