"""Integration test: plan, generate, and aggregate context through the wired engine."""

from __future__ import annotations

from pathlib import Path

from tests.fakes.fake_artifacts import make_record, text_of_tokens
from tests.fakes.fake_redis import FakeRedisClient
from tiered_context import AppSettings, DegradationKind, create_engine
from tiered_context.context.cache.redis import RedisCache
from tiered_context.core.config import ArtifactStoreConfig, ContextCacheConfig
from tiered_context.stores import FileArtifactStore


def _settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        artifacts=ArtifactStoreConfig(backend="file", store_path=tmp_path / "artifacts"),
        context_cache=ContextCacheConfig(max_entries=10),
    )


class TestGenerationWalkthrough:
    """Follow the suggested order, producing each artifact, then aggregate the target."""

    async def test_sales_slide_deck_from_scratch(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        store = FileArtifactStore(settings.artifacts.store_path)
        engine = create_engine(settings, artifact_store=store)
        user = "founder-7"

        for minute, input_id in enumerate(("product-name", "product-description", "current-business-stage")):
            store.add(user, make_record(input_id, f"{input_id} text", minute=minute))

        plan = engine.suggested_order("sales-slide-deck", await store.list_artifact_ids(user))
        assert plan[0] == "icp-analysis"
        assert plan[-1] == "sales-slide-deck"

        for step, resource_id in enumerate(plan[:-1], start=10):
            assert engine.validate_dependencies(resource_id, await store.list_artifact_ids(user)).valid
            store.add(user, make_record(resource_id, {"summary": f"{resource_id} body", "items": [1, 2]}, minute=step))

        have = await store.list_artifact_ids(user)
        assert engine.validate_dependencies("sales-slide-deck", have).valid
        assert engine.calculate_generation_cost("sales-slide-deck", have).resource_count == 1

        context = await engine.aggregate(user, "sales-slide-deck")
        await engine.drain()

        included = {e.id for e in context.entries()}
        assert {"product-name", "product-description", "icp-analysis", "value-messaging"} <= included
        assert context.used_default_tiers is False
        assert context.total_tokens == context.token_breakdown.total
        assert context.formatted_text.index("CRITICAL FOUNDATION") < context.formatted_text.index(
            "REQUIRED DEPENDENCIES"
        )

        again = await engine.aggregate(user, "sales-slide-deck")
        assert again.from_cache is True

        store.add(user, make_record("empathy-maps", text_of_tokens(300), minute=99))
        refreshed = await engine.aggregate(user, "sales-slide-deck")
        assert refreshed.from_cache is False
        assert "empathy-maps" in {e.id for e in refreshed.tier3}

    async def test_analytics_against_full_history(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        store = FileArtifactStore(settings.artifacts.store_path)
        engine = create_engine(settings, artifact_store=store, cache=None)
        user = "founder-8"

        for minute, resource_id in enumerate(("product-name", "product-description", "icp-analysis")):
            store.add(user, make_record(resource_id, text_of_tokens(100), minute=minute))
        for minute, unrelated in enumerate(("board-presentation", "roi-models", "day-in-life"), start=10):
            store.add(user, make_record(unrelated, text_of_tokens(1500), minute=minute))

        report = await engine.analytics(user, "target-buyer-personas")

        assert report.breakdown["tier1"].resources == 3
        assert report.optimization.naive_total_tokens == 300 + 4500
        assert report.optimization.optimized_tokens == 300
        assert report.optimization.savings_percent == 94


class TestRedisBackedEngine:
    async def test_cache_round_trip_through_redis(self, tmp_path: Path) -> None:
        settings = _settings(tmp_path)
        store = FileArtifactStore(settings.artifacts.store_path)
        client = FakeRedisClient()
        cache = RedisCache(key_prefix="test:", default_ttl_seconds=600, client=client)
        engine = create_engine(settings, artifact_store=store, cache=cache)
        user = "founder-9"
        store.add(user, make_record("product-name", "Acme"))

        first = await engine.aggregate(user, "icp-analysis")
        await engine.drain()
        assert len(client.data) == 1
        assert all(ttl == settings.context_cache.ttl_seconds for ttl in client.ttls.values())

        second = await engine.aggregate(user, "icp-analysis")
        assert second.from_cache is True
        assert second.tier1 == first.tier1
        assert [n.kind for n in first.notices].count(DegradationKind.DEPENDENCY_MISSING) == 2

        assert await engine.invalidate_user(user) == 1
        assert client.data == {}
