"""Redis-backed context cache with async support.

Requires optional dependency: ``pip install tiered-context[redis]``
"""

from __future__ import annotations

import json
import logging
from typing import Any

from tiered_context.context.cache.key_strategy import target_key_prefix, user_key_prefix
from tiered_context.exceptions import CacheUnavailableError

log = logging.getLogger(__name__)


class RedisCache:
    """Async Redis cache using ``redis.asyncio`` with Redis-native TTL.

    Requires: ``pip install tiered-context[redis]``
    """

    def __init__(
        self,
        url: str = "",
        *,
        key_prefix: str = "tierctx:cache:",
        default_ttl_seconds: int = 0,
        client: Any | None = None,
    ) -> None:
        self._url = url or "redis://localhost:6379"
        self._prefix = key_prefix
        self._default_ttl = default_ttl_seconds
        self._client = client

    def _get_client(self) -> Any:
        """Lazy-initialize the Redis async client."""
        if self._client is not None:
            return self._client
        try:
            import redis.asyncio as aioredis
        except ImportError as e:
            raise CacheUnavailableError(
                "Redis is required for the Redis context cache backend. "
                "Install it with: pip install tiered-context[redis]"
            ) from e

        self._client = aioredis.from_url(self._url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Any | None:
        """Retrieve a cached value. Returns None on miss (Redis handles TTL)."""
        client = self._get_client()
        raw = await client.get(f"{self._prefix}{key}")
        if raw is None:
            return None
        return json.loads(raw)

    async def put(self, key: str, value: Any, *, ttl_seconds: int = 0) -> None:
        client = self._get_client()
        serialized = json.dumps(value)
        full_key = f"{self._prefix}{key}"
        ttl = ttl_seconds or self._default_ttl
        if ttl > 0:
            await client.setex(full_key, ttl, serialized)
        else:
            await client.set(full_key, serialized)

    async def invalidate(self, key: str) -> None:
        client = self._get_client()
        await client.delete(f"{self._prefix}{key}")

    async def invalidate_user(self, user_id: str) -> int:
        """Delete every key under the user's prefix (SCAN, not KEYS)."""
        return await self._delete_matching(f"{self._prefix}{user_key_prefix(user_id)}*")

    async def invalidate_target(self, user_id: str, target_id: str) -> int:
        return await self._delete_matching(f"{self._prefix}{target_key_prefix(user_id, target_id)}*")

    async def entries_for_user(self, user_id: str) -> list[tuple[str, Any]]:
        client = self._get_client()
        pattern = f"{self._prefix}{user_key_prefix(user_id)}*"
        entries: list[tuple[str, Any]] = []
        async for full_key in client.scan_iter(match=pattern):
            raw = await client.get(full_key)
            # expired between SCAN and GET
            if raw is None:
                continue
            entries.append((full_key[len(self._prefix) :], json.loads(raw)))
        return entries

    async def clear(self) -> None:
        """Remove all entries under this cache's key prefix."""
        await self._delete_matching(f"{self._prefix}*")

    async def _delete_matching(self, pattern: str) -> int:
        client = self._get_client()
        keys = [key async for key in client.scan_iter(match=pattern)]
        if keys:
            await client.delete(*keys)
        log.debug("Deleted %d redis keys matching %s", len(keys), pattern)
        return len(keys)
