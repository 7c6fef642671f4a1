"""Aggregation service: tiered, budgeted context for one generation request.

Pipeline per request::

    artifact ids -> set hash -> cache lookup
        -> tier assignment -> records -> tiers 1/2 (verbatim) -> tier 3 (lossy)
        -> formatted text -> background cache write

Everything short of an unknown target or an unreadable artifact store
degrades instead of failing: missing dependencies are skipped, cache errors
become misses, and a broken prefix provider yields no prefix.  Each such
degradation is logged and recorded as a :class:`Notice` on the result.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from tiered_context.context.budget import BudgetEnforcer, serialize_output
from tiered_context.context.cache.key_strategy import compute_artifact_set_hash, compute_cache_key
from tiered_context.context.estimators import ApproximateSizeEstimator
from tiered_context.context.formatting import format_context
from tiered_context.context.models import (
    AggregatedContext,
    CachedContextInfo,
    ContextAnalytics,
    DegradationKind,
    Notice,
    OptimizationSummary,
    TierUsage,
    TokenBreakdown,
    UserCacheStats,
)
from tiered_context.context.prefix import NullPrefixProvider
from tiered_context.context.summarization import create_summarizer
from tiered_context.exceptions import ArtifactStoreError
from tiered_context.planning import DependencyPlanner

if TYPE_CHECKING:
    from tiered_context.context.protocols import IContextCache, IPrefixProvider, ISizeEstimator, ISummarizer
    from tiered_context.core.types import AvailableIds
    from tiered_context.planning import DependencyValidation, GenerationCost
    from tiered_context.registry import ResourceRegistry
    from tiered_context.stores import GeneratedArtifactRecord, IArtifactStore
    from tiered_context.tiers import TierConfigRegistry

log = logging.getLogger(__name__)


class ContextAggregationEngine:
    """Select, shape, and budget a user's artifacts for a target generation."""

    def __init__(
        self,
        registry: ResourceRegistry,
        tier_configs: TierConfigRegistry,
        artifact_store: IArtifactStore,
        cache: IContextCache | None = None,
        *,
        estimator: ISizeEstimator | None = None,
        summarizer: ISummarizer | None = None,
        prefix_provider: IPrefixProvider | None = None,
        settings: object | None = None,
    ) -> None:
        aggregation = getattr(settings, "aggregation", settings)
        cache_config = getattr(settings, "context_cache", None)

        self._registry = registry
        self._tiers = tier_configs
        self._store = artifact_store
        self._cache = cache
        self._estimator = estimator or ApproximateSizeEstimator()
        self._prefix = prefix_provider or NullPrefixProvider()
        self._planner = DependencyPlanner(registry)
        self._cost_per_million = getattr(aggregation, "cost_per_million_tokens", 3.0)
        self._cache_ttl = getattr(cache_config, "ttl_seconds", 0)
        self._enforcer = BudgetEnforcer(
            self._estimator,
            summarizer or create_summarizer(aggregation, self._estimator),
            summary_target_tokens=getattr(aggregation, "summary_target_tokens", 200),
        )
        self._pending_writes: set[asyncio.Task[None]] = set()

    # ── Aggregation ─────────────────────────────────────────────────

    async def aggregate(self, user_id: str, target_id: str, use_cache: bool = True) -> AggregatedContext:
        """Build (or serve from cache) the tiered context for *target_id*.

        Raises:
            UnknownResourceError: If *target_id* is not a registered resource.
            ArtifactStoreError: If the user's artifacts cannot be read.
        """
        started = time.perf_counter()
        node = self._registry.require(target_id)

        with structlog.contextvars.bound_contextvars(user_id=user_id, target_id=target_id):
            notices: list[Notice] = []
            use_cache = use_cache and self._cache is not None

            ids = await self._store.list_artifact_ids(user_id)
            set_hash = compute_artifact_set_hash(ids)
            key = compute_cache_key(user_id, target_id, set_hash)

            if use_cache:
                cached = await self._cache_lookup(key, notices)
                if cached is not None:
                    elapsed = (time.perf_counter() - started) * 1000
                    log.info("Serving cached context for %s (%.1f ms)", target_id, elapsed)
                    return cached.model_copy(update={"from_cache": True, "compute_latency_ms": elapsed})

            assignment, is_default = self._tiers.resolve(target_id)
            if is_default:
                log.info("Using default tier configuration for %s", target_id)
                notices.append(
                    Notice(
                        kind=DegradationKind.CONFIG_MISSING,
                        resource_id=target_id,
                        detail="default tier assignment synthesized",
                    )
                )

            records = await self._fetch_records(user_id)
            log.info("User has %d generated artifacts", len(records))

            # Latest-produced record wins when an id appears twice
            by_id = {r.id: r for r in records}
            budget = assignment.token_budget
            tier1 = self._enforcer.build_hard_tier(1, assignment.tier1_critical, by_id, budget.tier1)
            tier2 = self._enforcer.build_hard_tier(2, assignment.tier2_required, by_id, budget.tier2)
            tier3 = self._enforcer.build_lossy_tier(assignment.tier3_optional, by_id, budget.tier3)
            for block in (tier1, tier2, tier3):
                notices.extend(block.notices)

            prefix = self._render_prefix(records, notices)
            breakdown = TokenBreakdown(
                tier1=tier1.tokens,
                tier2=tier2.tokens,
                tier3=tier3.tokens,
                external=self._estimator.estimate(prefix),
            )

            result = AggregatedContext(
                user_id=user_id,
                target_id=target_id,
                target_name=node.name,
                artifact_set_hash=compute_artifact_set_hash(r.id for r in records),
                tier1=tier1.entries,
                tier2=tier2.entries,
                tier3=tier3.entries,
                prefix=prefix,
                total_tokens=breakdown.total,
                token_breakdown=breakdown,
                formatted_text=format_context(tier1.entries, tier2.entries, tier3.entries, prefix),
                evicted_ids=tier3.evicted_ids,
                notices=notices,
                used_default_tiers=is_default,
                compute_latency_ms=(time.perf_counter() - started) * 1000,
            )
            log.info(
                "Context aggregated for %s: %d tokens (T1: %d, T2: %d, T3: %d, external: %d)",
                target_id,
                result.total_tokens,
                breakdown.tier1,
                breakdown.tier2,
                breakdown.tier3,
                breakdown.external,
            )

            if use_cache:
                write_key = compute_cache_key(user_id, target_id, result.artifact_set_hash)
                self._schedule_cache_write(write_key, result)
                # Let the write start so an immediate repeat call can hit it
                await asyncio.sleep(0)
            return result

    async def analytics(self, user_id: str, target_id: str) -> ContextAnalytics:
        """Size and cost of the aggregated context against sending every artifact whole."""
        context = await self.aggregate(user_id, target_id)
        records = await self._fetch_records(user_id)

        naive = sum(self._estimator.estimate(serialize_output(r)) for r in records)
        naive += context.token_breakdown.external
        optimized = context.total_tokens
        savings = round((naive - optimized) / naive * 100) if naive > 0 else 0

        return ContextAnalytics(
            target_id=target_id,
            estimated_tokens=optimized,
            estimated_cost=optimized / 1_000_000 * self._cost_per_million,
            breakdown={
                "tier1": TierUsage(resources=len(context.tier1), tokens=context.token_breakdown.tier1),
                "tier2": TierUsage(resources=len(context.tier2), tokens=context.token_breakdown.tier2),
                "tier3": TierUsage(resources=len(context.tier3), tokens=context.token_breakdown.tier3),
            },
            optimization=OptimizationSummary(
                naive_total_tokens=naive,
                optimized_tokens=optimized,
                tokens_saved=naive - optimized,
                savings_percent=savings,
            ),
        )

    # ── Planning queries ────────────────────────────────────────────

    def validate_dependencies(self, target_id: str, available_ids: AvailableIds = ()) -> DependencyValidation:
        return self._planner.validate_dependencies(target_id, available_ids)

    def calculate_generation_cost(self, target_id: str, available_ids: AvailableIds = ()) -> GenerationCost:
        return self._planner.calculate_generation_cost(target_id, available_ids)

    def suggested_order(self, target_id: str, available_ids: AvailableIds = ()) -> list[str]:
        return self._planner.suggested_order(target_id, available_ids)

    # ── Cache management ────────────────────────────────────────────

    async def warm_cache(self, user_id: str, target_ids: Iterable[str]) -> int:
        """Pre-aggregate targets with no cache entry; returns how many were built."""
        if self._cache is None:
            return 0
        set_hash = compute_artifact_set_hash(await self._store.list_artifact_ids(user_id))
        warmed = 0
        for target_id in target_ids:
            self._registry.require(target_id)
            if await self._cache_lookup(compute_cache_key(user_id, target_id, set_hash), []) is not None:
                continue
            await self.aggregate(user_id, target_id, use_cache=True)
            warmed += 1
        await self.drain()
        log.info("Warmed %d cache entries for user %s", warmed, user_id)
        return warmed

    async def invalidate_user(self, user_id: str) -> int:
        """Drop every cached aggregation for *user_id*."""
        if self._cache is None:
            return 0
        removed = await self._cache.invalidate_user(user_id)
        log.info("Invalidated %d cached contexts for user %s", removed, user_id)
        return removed

    async def invalidate_target(self, user_id: str, target_id: str) -> int:
        """Drop *user_id*'s cached aggregations for *target_id* under every artifact set."""
        self._registry.require(target_id)
        if self._cache is None:
            return 0
        removed = await self._cache.invalidate_target(user_id, target_id)
        log.info("Invalidated %d cached contexts for %s (user %s)", removed, target_id, user_id)
        return removed

    async def cache_stats(self, user_id: str) -> UserCacheStats:
        """Per-user view of cached aggregations: ages, sizes, and build times."""
        if self._cache is None:
            return UserCacheStats(user_id=user_id)
        now = datetime.now(timezone.utc)
        infos: list[CachedContextInfo] = []
        for key, value in await self._cache.entries_for_user(user_id):
            try:
                context = AggregatedContext.model_validate(value)
            except ValidationError:
                log.debug("Skipping unreadable cache entry %s", key)
                continue
            cached_at = context.cached_at or now
            if cached_at.tzinfo is None:
                cached_at = cached_at.replace(tzinfo=timezone.utc)
            infos.append(
                CachedContextInfo(
                    key=key,
                    target_id=context.target_id,
                    artifact_set_hash=context.artifact_set_hash,
                    total_tokens=context.total_tokens,
                    compute_latency_ms=context.compute_latency_ms,
                    cached_at=cached_at,
                    age_seconds=max((now - cached_at).total_seconds(), 0.0),
                )
            )
        return UserCacheStats.from_entries(user_id, infos)

    async def drain(self) -> None:
        """Wait for in-flight background cache writes."""
        if self._pending_writes:
            await asyncio.gather(*self._pending_writes)

    # ── Internals ───────────────────────────────────────────────────

    async def _fetch_records(self, user_id: str) -> list[GeneratedArtifactRecord]:
        try:
            return await self._store.list_artifacts(user_id)
        except ArtifactStoreError:
            log.error("Failed to fetch artifacts for user %s", user_id)
            raise

    async def _cache_lookup(self, key: str, notices: list[Notice]) -> AggregatedContext | None:
        if self._cache is None:
            return None
        try:
            cached: Any = await self._cache.get(key)
        except Exception as exc:
            log.warning("Context cache read failed, treating as miss: %s", exc)
            notices.append(Notice(kind=DegradationKind.CACHE_UNAVAILABLE, detail=f"read: {exc}"))
            return None
        if cached is None:
            return None
        try:
            return AggregatedContext.model_validate(cached)
        except ValidationError as exc:
            log.warning("Discarding unreadable cache entry %s: %s", key, exc.error_count())
            return None

    def _schedule_cache_write(self, key: str, result: AggregatedContext) -> None:
        payload = result.model_dump(mode="json")
        payload["cached_at"] = datetime.now(timezone.utc).isoformat()
        task = asyncio.create_task(self._write_cache(key, payload))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write_cache(self, key: str, payload: dict[str, Any]) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.put(key, payload, ttl_seconds=self._cache_ttl)
        except Exception as exc:
            log.warning("Failed to cache context %s: %s", key, exc)

    def _render_prefix(self, records: list[GeneratedArtifactRecord], notices: list[Notice]) -> str:
        try:
            return self._prefix.render(records) or ""
        except Exception as exc:
            log.warning("Prefix provider failed, continuing without prefix: %s", exc)
            notices.append(Notice(kind=DegradationKind.PREFIX_UNAVAILABLE, detail=str(exc)))
            return ""
