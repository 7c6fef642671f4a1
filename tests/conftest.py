"""Shared fixtures for tiered-context tests."""

from __future__ import annotations

import pytest

from tiered_context.context.cache.memory import MemoryCache
from tiered_context.registry import InputField, ResourceNode, ResourceRegistry, build_default_registry
from tiered_context.services import ContextAggregationEngine
from tiered_context.stores import MemoryArtifactStore
from tiered_context.tiers import TierConfigRegistry, build_default_tier_configs


@pytest.fixture(scope="session")
def registry() -> ResourceRegistry:
    """The bundled catalog (immutable, safe to share)."""
    return build_default_registry()


@pytest.fixture(scope="session")
def tier_configs(registry: ResourceRegistry) -> TierConfigRegistry:
    return build_default_tier_configs(registry)


@pytest.fixture
def small_registry() -> ResourceRegistry:
    """Small graph: icp-analysis -> mid -> top, plus four optional-only leaves.

    ``top`` lists a tier-1 input among its optional dependencies so default
    synthesis has to drop it before splitting tier 3 from tier 4.
    """
    inputs = [
        InputField("product-name", "Product Name"),
        InputField("product-description", "Product Description"),
        InputField("extra-input", "Extra Input"),
    ]
    nodes = [
        ResourceNode(
            id="icp-analysis",
            name="ICP Analysis",
            tier=1,
            category="core",
            required_dependencies=("product-name", "product-description"),
            generation_cost=1.0,
            estimated_tokens=100,
        ),
        ResourceNode(
            id="mid",
            name="Mid",
            tier=2,
            category="core",
            required_dependencies=("icp-analysis",),
            generation_cost=2.0,
            estimated_tokens=200,
        ),
        *(
            ResourceNode(id=f"leaf-{c}", name=f"Leaf {c.upper()}", tier=1, category="advanced", generation_cost=0.5)
            for c in "abcd"
        ),
        ResourceNode(
            id="top",
            name="Top",
            tier=3,
            category="strategic",
            required_dependencies=("icp-analysis", "mid", "extra-input"),
            optional_dependencies=("leaf-a", "leaf-b", "product-name", "leaf-c", "leaf-d"),
            generation_cost=4.0,
            estimated_tokens=400,
        ),
    ]
    return ResourceRegistry(nodes, inputs)


@pytest.fixture
def artifact_store() -> MemoryArtifactStore:
    return MemoryArtifactStore()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache(max_entries=100)


@pytest.fixture
def engine(
    registry: ResourceRegistry,
    tier_configs: TierConfigRegistry,
    artifact_store: MemoryArtifactStore,
    memory_cache: MemoryCache,
) -> ContextAggregationEngine:
    """Engine over the bundled catalog with an empty store and a memory cache."""
    return ContextAggregationEngine(registry, tier_configs, artifact_store, memory_cache)
