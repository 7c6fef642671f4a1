"""Aggregated-context caching: factory + backend implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiered_context.context.cache.key_strategy import (
    compute_artifact_set_hash,
    compute_cache_key,
    target_key_prefix,
    user_key_prefix,
)
from tiered_context.context.cache.memory import MemoryCache
from tiered_context.context.protocols import IContextCache

if TYPE_CHECKING:
    from tiered_context.core.config import ContextCacheConfig

__all__ = [
    "MemoryCache",
    "compute_artifact_set_hash",
    "compute_cache_key",
    "create_context_cache",
    "target_key_prefix",
    "user_key_prefix",
]


def create_context_cache(settings: object | None = None) -> IContextCache | None:
    """Create a context cache from settings.

    Args:
        settings: An ``AppSettings`` or ``ContextCacheConfig`` instance.
            If None, returns MemoryCache with defaults.

    Returns:
        The configured backend, or None when caching is disabled.
    """
    config: ContextCacheConfig | None = None

    if settings is not None:
        config = getattr(settings, "context_cache", None)
        if config is None and hasattr(settings, "backend") and hasattr(settings, "ttl_seconds"):
            config = settings  # type: ignore[assignment]

    if config is None:
        return MemoryCache()
    if not config.enabled:
        return None

    backend = config.backend
    if backend == "memory":
        return MemoryCache(max_entries=config.max_entries, default_ttl_seconds=config.ttl_seconds)
    elif backend == "redis":
        from tiered_context.context.cache.redis import RedisCache

        return RedisCache(
            url=config.redis_url,
            key_prefix=config.key_prefix,
            default_ttl_seconds=config.ttl_seconds,
        )
    else:
        raise ValueError(f"Unknown context cache backend: {backend!r}")
