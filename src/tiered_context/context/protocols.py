"""Context engineering protocols: size estimation, summarization, caching, prefixes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from tiered_context.context.models import SummarizedContent
from tiered_context.stores.models import GeneratedArtifactRecord


@runtime_checkable
class ISizeEstimator(Protocol):
    """Estimates how many tokens a piece of text will cost."""

    def estimate(self, text: str) -> int:
        """Estimated token count of *text* (0 for empty text)."""
        ...


@runtime_checkable
class ISummarizer(Protocol):
    """Protocol for lossy summarization backends.

    Summarizers are synchronous: the work is CPU-bound, not I/O-bound.
    """

    def summarize(self, text: str, *, target_tokens: int) -> SummarizedContent:
        """Shrink text towards *target_tokens*.

        Args:
            text: Serialized artifact content.
            target_tokens: Desired upper size of the result.

        Returns:
            SummarizedContent with the reduced text and metadata.
        """
        ...


@runtime_checkable
class IContextCache(Protocol):
    """Protocol for async aggregated-context caching backends."""

    async def get(self, key: str) -> Any | None:
        """Retrieve a cached value by key. Returns None on miss."""
        ...

    async def put(self, key: str, value: Any, *, ttl_seconds: int = 0) -> None:
        """Store a value under the given key with optional TTL.

        Args:
            key: Cache key.
            value: JSON-serializable value.
            ttl_seconds: Time-to-live in seconds. 0 = use backend default.
        """
        ...

    async def invalidate(self, key: str) -> None:
        """Remove a specific key from the cache."""
        ...

    async def invalidate_user(self, user_id: str) -> int:
        """Remove every entry belonging to *user_id*; returns the count removed."""
        ...

    async def invalidate_target(self, user_id: str, target_id: str) -> int:
        """Remove *user_id*'s entries for *target_id* across all artifact sets."""
        ...

    async def entries_for_user(self, user_id: str) -> list[tuple[str, Any]]:
        """Live ``(key, value)`` pairs belonging to *user_id*."""
        ...

    async def clear(self) -> None:
        """Remove all entries from the cache."""
        ...


@runtime_checkable
class IPrefixProvider(Protocol):
    """Supplies an opaque, pre-formatted block placed before all tiers."""

    def render(self, records: Sequence[GeneratedArtifactRecord]) -> str:
        """Return the prefix text, or an empty string for none."""
        ...
