"""Data models for context aggregation, summarization, and caching."""

from __future__ import annotations

import dataclasses
import time
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DegradationKind(str, Enum):
    """Non-fatal conditions the engine absorbs instead of failing."""

    CONFIG_MISSING = "config_missing"
    DEPENDENCY_MISSING = "dependency_missing"
    CACHE_UNAVAILABLE = "cache_unavailable"
    BUDGET_EXCEEDED = "budget_exceeded"
    MALFORMED_CONTENT = "malformed_content"
    EVICTED = "evicted"
    PREFIX_UNAVAILABLE = "prefix_unavailable"


class Notice(BaseModel):
    """A degradation observed while building one aggregated context."""

    kind: DegradationKind
    resource_id: str | None = None
    detail: str = ""


class ContextEntry(BaseModel):
    """One dependency's content as placed in a tier block."""

    id: str
    name: str
    content: str
    token_count: int
    summarized: bool = False


class TokenBreakdown(BaseModel):
    tier1: int = 0
    tier2: int = 0
    tier3: int = 0
    external: int = 0

    @property
    def total(self) -> int:
        return self.tier1 + self.tier2 + self.tier3 + self.external


class AggregatedContext(BaseModel):
    """Tiered, budgeted context for one (user, target) pair.

    Immutable snapshot: served from cache as-is apart from the
    ``from_cache``/``cached_at``/``compute_latency_ms`` fields.
    """

    user_id: str
    target_id: str
    target_name: str
    artifact_set_hash: str
    tier1: list[ContextEntry] = Field(default_factory=list)
    tier2: list[ContextEntry] = Field(default_factory=list)
    tier3: list[ContextEntry] = Field(default_factory=list)
    prefix: str = ""
    total_tokens: int = 0
    token_breakdown: TokenBreakdown = Field(default_factory=TokenBreakdown)
    formatted_text: str = ""
    compute_latency_ms: float = 0.0
    evicted_ids: list[str] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)
    used_default_tiers: bool = False
    from_cache: bool = False
    cached_at: datetime | None = None

    def entries(self) -> list[ContextEntry]:
        return [*self.tier1, *self.tier2, *self.tier3]

    def notices_of(self, kind: DegradationKind) -> list[Notice]:
        return [n for n in self.notices if n.kind == kind]


class TierUsage(BaseModel):
    resources: int = 0
    tokens: int = 0


class OptimizationSummary(BaseModel):
    naive_total_tokens: int
    optimized_tokens: int
    tokens_saved: int
    savings_percent: int


class ContextAnalytics(BaseModel):
    """Size and cost report for an aggregation, compared with sending everything."""

    target_id: str
    estimated_tokens: int
    estimated_cost: float
    breakdown: dict[str, TierUsage]
    optimization: OptimizationSummary


class CachedContextInfo(BaseModel):
    """One cached aggregation as seen by :meth:`cache_stats`."""

    key: str
    target_id: str
    artifact_set_hash: str
    total_tokens: int
    compute_latency_ms: float
    cached_at: datetime
    age_seconds: float


class UserCacheStats(BaseModel):
    """Cached aggregations for one user plus averages over them."""

    user_id: str
    entries: list[CachedContextInfo] = Field(default_factory=list)
    oldest: CachedContextInfo | None = None
    newest: CachedContextInfo | None = None
    average_tokens: float = 0.0
    average_compute_latency_ms: float = 0.0

    @property
    def total_entries(self) -> int:
        return len(self.entries)

    @classmethod
    def from_entries(cls, user_id: str, entries: list[CachedContextInfo]) -> UserCacheStats:
        if not entries:
            return cls(user_id=user_id)
        ordered = sorted(entries, key=lambda e: e.cached_at)
        return cls(
            user_id=user_id,
            entries=ordered,
            oldest=ordered[0],
            newest=ordered[-1],
            average_tokens=sum(e.total_tokens for e in ordered) / len(ordered),
            average_compute_latency_ms=sum(e.compute_latency_ms for e in ordered) / len(ordered),
        )


@dataclasses.dataclass(frozen=True)
class SummarizedContent:
    """Result of summarizing one artifact's content."""

    text: str
    original_tokens: int
    summarized_tokens: int
    method: str
    malformed: bool = False

    @property
    def changed(self) -> bool:
        return self.method != "passthrough"


@dataclasses.dataclass
class CacheEntry:
    """Metadata wrapper for cached values with TTL tracking."""

    key: str
    value: Any
    created_at: float = dataclasses.field(default_factory=time.time)
    ttl_seconds: int = 0
    hit_count: int = 0

    @property
    def is_expired(self) -> bool:
        """Check if this entry has exceeded its TTL."""
        if self.ttl_seconds <= 0:
            return False
        return (time.time() - self.created_at) >= self.ttl_seconds
