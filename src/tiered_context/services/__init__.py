"""Application services composed from registry, tiers, stores, and caches."""

from __future__ import annotations

from tiered_context.services.aggregation_service import ContextAggregationEngine

__all__ = ["ContextAggregationEngine"]
