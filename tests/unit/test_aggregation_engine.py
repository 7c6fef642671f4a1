"""Tests for the context aggregation engine."""

from __future__ import annotations

import pytest

from tests.fakes.fake_artifacts import FailingArtifactStore, make_record, text_of_tokens
from tests.fakes.fake_context_cache import FailingContextCache, FakeContextCache
from tiered_context.context.cache.key_strategy import user_key_prefix
from tiered_context.context.cache.memory import MemoryCache
from tiered_context.context.models import DegradationKind
from tiered_context.context.prefix import CallablePrefixProvider, StaticPrefixProvider
from tiered_context.context.summarization import PassthroughSummarizer
from tiered_context.exceptions import ArtifactStoreError, UnknownResourceError
from tiered_context.registry import ResourceRegistry
from tiered_context.services import ContextAggregationEngine
from tiered_context.stores import MemoryArtifactStore
from tiered_context.tiers import TierConfigRegistry

USER = "user-1"


def _seed_basics(store: MemoryArtifactStore, user: str = USER) -> None:
    store.add(user, make_record("product-name", "Acme Forecast", minute=0))
    store.add(user, make_record("product-description", "Demand forecasting for bakeries.", minute=1))
    store.add(user, make_record("current-business-stage", "Pre-revenue, 3 pilots", minute=2))


def _engine(
    registry: ResourceRegistry,
    tier_configs: TierConfigRegistry,
    store: object,
    cache: object = None,
    **kwargs: object,
) -> ContextAggregationEngine:
    return ContextAggregationEngine(registry, tier_configs, store, cache, **kwargs)  # type: ignore[arg-type]


class TestAggregate:
    """Tier selection and formatting for explicit and default assignments."""

    async def test_icp_analysis_from_inputs(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        result = await engine.aggregate(USER, "icp-analysis")

        assert [e.id for e in result.tier1] == ["product-name", "product-description", "current-business-stage"]
        assert result.tier2 == [] and result.tier3 == []
        assert result.notices == []
        assert result.used_default_tiers is False
        assert result.from_cache is False
        assert result.target_name == "ICP Analysis"
        # ceil(13/4) + ceil(32/4) + ceil(21/4)
        assert result.total_tokens == 4 + 8 + 6
        assert result.token_breakdown.tier1 == 18
        assert result.formatted_text.startswith("## CRITICAL FOUNDATION CONTEXT\n\n### Product Name\nAcme Forecast")

    async def test_missing_dependencies_skipped_with_notices(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        result = await engine.aggregate(USER, "target-buyer-personas")

        assert [e.id for e in result.tier1] == ["product-name", "product-description"]
        missing = result.notices_of(DegradationKind.DEPENDENCY_MISSING)
        assert [n.resource_id for n in missing] == ["icp-analysis", "refined-product-description"]
        assert "OPTIONAL ENHANCEMENT" not in result.formatted_text

    async def test_personas_with_no_artifacts(self, engine: ContextAggregationEngine) -> None:
        validation = engine.validate_dependencies("target-buyer-personas", [])
        assert validation.valid is False
        assert "icp-analysis" in validation.missing_required

        result = await engine.aggregate(USER, "target-buyer-personas")
        assert result.tier1 == [] and result.tier2 == [] and result.tier3 == []
        assert result.total_tokens == 0
        assert "icp-analysis" in [n.resource_id for n in result.notices_of(DegradationKind.DEPENDENCY_MISSING)]

    async def test_default_tiers_flagged(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        result = await engine.aggregate(USER, "service-blueprints")
        assert result.used_default_tiers is True
        assert result.notices_of(DegradationKind.CONFIG_MISSING)[0].resource_id == "service-blueprints"

    async def test_hard_tier_over_budget_is_kept(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        artifact_store.add(USER, make_record("product-name", text_of_tokens(600)))
        result = await engine.aggregate(USER, "icp-analysis")
        assert result.token_breakdown.tier1 == 600
        assert result.notices_of(DegradationKind.BUDGET_EXCEEDED)

    async def test_latest_record_wins_for_duplicate_ids(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        artifact_store.add(USER, make_record("product-name", "New Name", minute=5))
        artifact_store.add(USER, make_record("product-name", "Old Name", minute=0))
        result = await engine.aggregate(USER, "icp-analysis")
        assert [e.content for e in result.tier1] == ["New Name"]

    async def test_tier3_summarized_within_budget(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        artifact_store.add(USER, make_record("icp-analysis", "icp", minute=3))
        artifact_store.add(USER, make_record("target-buyer-personas", "personas", minute=4))
        for i, dep in enumerate(("empathy-maps", "refined-product-description")):
            artifact_store.add(USER, make_record(dep, text_of_tokens(500), minute=5 + i))

        result = await engine.aggregate(USER, "value-messaging")

        assert [e.id for e in result.tier3] == ["empathy-maps", "refined-product-description"]
        assert all(e.summarized for e in result.tier3)
        assert all(e.token_count < 500 for e in result.tier3)
        assert result.evicted_ids == []
        assert "### Empathy Maps (Summary)" in result.formatted_text

    async def test_tier3_evicts_largest_over_budget(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        for i, dep in enumerate(("empathy-maps", "refined-product-description")):
            artifact_store.add(USER, make_record(dep, text_of_tokens(500), minute=5 + i))
        engine = _engine(registry, tier_configs, artifact_store, summarizer=PassthroughSummarizer())

        result = await engine.aggregate(USER, "value-messaging")

        # tier 3 budget is 800: two 500-token items do not fit, equal sizes evict the first configured
        assert result.evicted_ids == ["empathy-maps"]
        assert [e.id for e in result.tier3] == ["refined-product-description"]
        assert result.token_breakdown.tier3 == 500
        assert result.notices_of(DegradationKind.EVICTED)[0].resource_id == "empathy-maps"

    async def test_unknown_target_raises_before_reading_store(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry
    ) -> None:
        engine = _engine(registry, tier_configs, FailingArtifactStore())
        with pytest.raises(UnknownResourceError):
            await engine.aggregate(USER, "not-a-resource")

    async def test_store_failure_propagates(self, registry: ResourceRegistry, tier_configs: TierConfigRegistry) -> None:
        engine = _engine(registry, tier_configs, FailingArtifactStore())
        with pytest.raises(ArtifactStoreError):
            await engine.aggregate(USER, "icp-analysis")


class TestPrefix:
    async def test_prefix_placed_first_and_counted_as_external(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        engine = _engine(registry, tier_configs, artifact_store, prefix_provider=StaticPrefixProvider("PREFIX"))
        result = await engine.aggregate(USER, "icp-analysis")

        assert result.prefix == "PREFIX"
        assert result.token_breakdown.external == 2
        assert result.formatted_text.startswith("PREFIX\n---\n\n## CRITICAL FOUNDATION CONTEXT")
        assert result.total_tokens == result.token_breakdown.tier1 + 2

    async def test_failing_prefix_degrades(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        def broken(records: object) -> str:
            raise RuntimeError("extractor crashed")

        _seed_basics(artifact_store)
        engine = _engine(registry, tier_configs, artifact_store, prefix_provider=CallablePrefixProvider(broken))
        result = await engine.aggregate(USER, "icp-analysis")

        assert result.prefix == ""
        assert result.notices_of(DegradationKind.PREFIX_UNAVAILABLE)[0].detail == "extractor crashed"
        assert len(result.tier1) == 3


class TestCaching:
    async def test_second_call_served_from_cache(
        self,
        engine: ContextAggregationEngine,
        artifact_store: MemoryArtifactStore,
        memory_cache: MemoryCache,
    ) -> None:
        _seed_basics(artifact_store)
        first = await engine.aggregate(USER, "icp-analysis")
        await engine.drain()
        second = await engine.aggregate(USER, "icp-analysis")

        assert second.from_cache is True
        assert second.cached_at is not None
        assert second.formatted_text == first.formatted_text
        assert second.artifact_set_hash == first.artifact_set_hash
        assert memory_cache.stats()["hits"] == 1

    async def test_back_to_back_calls_hit_without_drain(
        self,
        engine: ContextAggregationEngine,
        artifact_store: MemoryArtifactStore,
        memory_cache: MemoryCache,
    ) -> None:
        _seed_basics(artifact_store)
        await engine.aggregate(USER, "icp-analysis")
        second = await engine.aggregate(USER, "icp-analysis")

        assert second.from_cache is True
        assert memory_cache.stats()["entries"] == 1

    async def test_new_artifact_misses_cache(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        await engine.aggregate(USER, "icp-analysis")
        await engine.drain()
        artifact_store.add(USER, make_record("icp-analysis", "fresh", minute=9))

        result = await engine.aggregate(USER, "icp-analysis")
        assert result.from_cache is False

    async def test_in_place_edit_keeps_serving_cached_context(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        await engine.aggregate(USER, "icp-analysis")
        await engine.drain()
        artifact_store.replace_output(USER, "product-name", "Renamed")

        cached = await engine.aggregate(USER, "icp-analysis")
        assert cached.from_cache is True
        assert cached.tier1[0].content == "Acme Forecast"

        fresh = await engine.aggregate(USER, "icp-analysis", use_cache=False)
        assert fresh.tier1[0].content == "Renamed"

    async def test_users_do_not_share_entries(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        cache = FakeContextCache()
        engine = _engine(registry, tier_configs, artifact_store, cache)
        _seed_basics(artifact_store, "alice")
        _seed_basics(artifact_store, "bob")

        await engine.aggregate("alice", "icp-analysis")
        await engine.drain()
        result = await engine.aggregate("bob", "icp-analysis")
        await engine.drain()

        assert result.from_cache is False
        assert result.user_id == "bob"
        assert len(set(cache.puts)) == 2

    async def test_failing_cache_degrades_to_miss(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        cache = FailingContextCache()
        engine = _engine(registry, tier_configs, artifact_store, cache)
        _seed_basics(artifact_store)

        result = await engine.aggregate(USER, "icp-analysis")
        await engine.drain()

        assert len(result.tier1) == 3
        assert result.notices_of(DegradationKind.CACHE_UNAVAILABLE)
        assert cache.put_attempts == 1

    async def test_unreadable_cache_entry_is_a_miss(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        cache = FakeContextCache()
        engine = _engine(registry, tier_configs, artifact_store, cache)
        _seed_basics(artifact_store)
        first = await engine.aggregate(USER, "icp-analysis")
        await engine.drain()
        await cache.put(cache.keys()[0], {"garbage": True})

        result = await engine.aggregate(USER, "icp-analysis")
        assert result.from_cache is False
        assert result.formatted_text == first.formatted_text

    async def test_use_cache_false_skips_cache(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore, memory_cache: MemoryCache
    ) -> None:
        _seed_basics(artifact_store)
        await engine.aggregate(USER, "icp-analysis", use_cache=False)
        await engine.drain()
        assert memory_cache.stats()["entries"] == 0

    async def test_warm_and_invalidate_user(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        assert await engine.warm_cache(USER, ["icp-analysis", "target-buyer-personas"]) == 2
        assert await engine.warm_cache(USER, ["icp-analysis"]) == 0

        assert (await engine.aggregate(USER, "icp-analysis")).from_cache is True
        assert await engine.invalidate_user(USER) == 2
        assert (await engine.aggregate(USER, "icp-analysis")).from_cache is False

    async def test_without_cache(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        engine = _engine(registry, tier_configs, artifact_store)
        _seed_basics(artifact_store)
        assert await engine.warm_cache(USER, ["icp-analysis"]) == 0
        assert await engine.invalidate_user(USER) == 0
        assert (await engine.aggregate(USER, "icp-analysis")).from_cache is False
        assert await engine.invalidate_target(USER, "icp-analysis") == 0
        assert (await engine.cache_stats(USER)).total_entries == 0

    async def test_invalidate_target_drops_every_artifact_set(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore, memory_cache: MemoryCache
    ) -> None:
        _seed_basics(artifact_store)
        await engine.aggregate(USER, "icp-analysis")
        artifact_store.add(USER, make_record("sales-slide-deck", "deck", minute=9))
        await engine.aggregate(USER, "icp-analysis")
        await engine.aggregate(USER, "target-buyer-personas")
        await engine.aggregate("other-user", "icp-analysis")
        await engine.drain()

        assert await engine.invalidate_target(USER, "icp-analysis") == 2
        assert memory_cache.stats()["entries"] == 2
        assert (await engine.aggregate(USER, "target-buyer-personas")).from_cache is True

    async def test_invalidate_target_rejects_unknown_target(self, engine: ContextAggregationEngine) -> None:
        with pytest.raises(UnknownResourceError):
            await engine.invalidate_target(USER, "not-a-resource")


class TestCacheStats:
    async def test_per_user_entries_and_averages(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        _seed_basics(artifact_store, "other-user")
        icp = await engine.aggregate(USER, "icp-analysis")
        personas = await engine.aggregate(USER, "target-buyer-personas")
        await engine.aggregate("other-user", "icp-analysis")
        await engine.drain()

        stats = await engine.cache_stats(USER)

        assert stats.total_entries == 2
        assert sorted(e.target_id for e in stats.entries) == ["icp-analysis", "target-buyer-personas"]
        assert stats.oldest is not None and stats.newest is not None
        assert stats.oldest.cached_at <= stats.newest.cached_at
        assert all(e.age_seconds >= 0 for e in stats.entries)
        assert stats.average_tokens == pytest.approx((icp.total_tokens + personas.total_tokens) / 2)
        assert stats.average_compute_latency_ms == pytest.approx(
            (icp.compute_latency_ms + personas.compute_latency_ms) / 2
        )

    async def test_empty_for_unknown_user(self, engine: ContextAggregationEngine) -> None:
        stats = await engine.cache_stats("nobody")
        assert stats.total_entries == 0
        assert stats.oldest is None
        assert stats.average_tokens == 0.0

    async def test_unreadable_entries_skipped(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        cache = FakeContextCache()
        engine = _engine(registry, tier_configs, artifact_store, cache)
        _seed_basics(artifact_store)
        await engine.aggregate(USER, "icp-analysis")
        await engine.drain()
        await cache.put(f"{user_key_prefix(USER)}junk:0", {"garbage": True})

        assert (await engine.cache_stats(USER)).total_entries == 1


class TestAnalytics:
    async def test_reports_savings_against_naive_total(
        self, engine: ContextAggregationEngine, artifact_store: MemoryArtifactStore
    ) -> None:
        _seed_basics(artifact_store)
        artifact_store.add(USER, make_record("sales-slide-deck", text_of_tokens(4000), minute=10))

        report = await engine.analytics(USER, "icp-analysis")

        opt = report.optimization
        assert report.estimated_tokens == opt.optimized_tokens
        assert opt.naive_total_tokens > opt.optimized_tokens
        assert opt.tokens_saved == opt.naive_total_tokens - opt.optimized_tokens
        assert 0 < opt.savings_percent <= 100
        assert report.breakdown["tier1"].resources == 3
        assert report.breakdown["tier2"].resources == 0
        assert report.estimated_cost == pytest.approx(report.estimated_tokens / 1_000_000 * 3.0)

    async def test_prefix_counts_toward_naive_total(
        self, registry: ResourceRegistry, tier_configs: TierConfigRegistry, artifact_store: MemoryArtifactStore
    ) -> None:
        artifact_store.add(USER, make_record("product-name", "Acme"))
        prefix = StaticPrefixProvider(text_of_tokens(50))
        engine = _engine(registry, tier_configs, artifact_store, prefix_provider=prefix)

        opt = (await engine.analytics(USER, "icp-analysis")).optimization

        assert opt.optimized_tokens == 1 + 50
        assert opt.naive_total_tokens == 1 + 50
        assert opt.savings_percent == 0

    async def test_no_artifacts_zero_savings(self, engine: ContextAggregationEngine) -> None:
        report = await engine.analytics(USER, "icp-analysis")
        assert report.optimization.naive_total_tokens == 0
        assert report.optimization.savings_percent == 0


class TestPlanningDelegation:
    def test_queries_delegate_to_planner(self, engine: ContextAggregationEngine) -> None:
        assert engine.suggested_order("icp-analysis") == ["icp-analysis"]
        assert engine.validate_dependencies("icp-analysis").valid is False
        assert engine.calculate_generation_cost("icp-analysis").resource_count == 1
