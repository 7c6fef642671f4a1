"""tiered-context: tiered, budgeted context aggregation over an artifact dependency graph.

Typical wiring::

    from tiered_context import AppSettings, create_engine

    engine = create_engine(AppSettings())
    context = await engine.aggregate("user-1", "sales-slide-deck")
    print(context.formatted_text)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiered_context.context import AggregatedContext, ContextAnalytics, DegradationKind, Notice
from tiered_context.context.cache import create_context_cache
from tiered_context.context.estimators import create_size_estimator
from tiered_context.context.summarization import create_summarizer
from tiered_context.core.config import AppSettings
from tiered_context.exceptions import TieredContextError, UnknownResourceError
from tiered_context.planning import DependencyPlanner
from tiered_context.registry import ResourceRegistry, build_default_registry
from tiered_context.services import ContextAggregationEngine
from tiered_context.stores import GeneratedArtifactRecord, create_artifact_store
from tiered_context.tiers import TierConfigRegistry, build_default_tier_configs

if TYPE_CHECKING:
    from tiered_context.context.protocols import IContextCache, IPrefixProvider
    from tiered_context.stores import IArtifactStore

__all__ = [
    "AggregatedContext",
    "AppSettings",
    "ContextAggregationEngine",
    "ContextAnalytics",
    "DegradationKind",
    "DependencyPlanner",
    "GeneratedArtifactRecord",
    "Notice",
    "ResourceRegistry",
    "TierConfigRegistry",
    "TieredContextError",
    "UnknownResourceError",
    "build_default_registry",
    "build_default_tier_configs",
    "create_engine",
]

_UNSET: object = object()


def create_engine(
    settings: AppSettings | None = None,
    *,
    registry: ResourceRegistry | None = None,
    artifact_store: IArtifactStore | None = None,
    cache: IContextCache | None | object = _UNSET,
    prefix_provider: IPrefixProvider | None = None,
) -> ContextAggregationEngine:
    """Wire an engine from settings, building any collaborator not supplied.

    Pass ``cache=None`` to run without a cache regardless of settings.
    """
    settings = settings or AppSettings()
    registry = registry or build_default_registry()
    estimator = create_size_estimator(settings)

    return ContextAggregationEngine(
        registry,
        build_default_tier_configs(registry, settings),
        artifact_store or create_artifact_store(settings),
        create_context_cache(settings) if cache is _UNSET else cache,  # type: ignore[arg-type]
        estimator=estimator,
        summarizer=create_summarizer(settings, estimator),
        prefix_provider=prefix_provider,
        settings=settings,
    )
