"""Context engineering: size estimation, tier budgets, summarization, caching."""

from __future__ import annotations

from tiered_context.context.budget import BudgetEnforcer, TierBlock, serialize_output
from tiered_context.context.estimators import (
    ApproximateSizeEstimator,
    TiktokenSizeEstimator,
    create_size_estimator,
)
from tiered_context.context.formatting import format_context
from tiered_context.context.models import (
    AggregatedContext,
    ContextAnalytics,
    ContextEntry,
    DegradationKind,
    Notice,
    OptimizationSummary,
    SummarizedContent,
    TierUsage,
    TokenBreakdown,
)
from tiered_context.context.prefix import CallablePrefixProvider, NullPrefixProvider, StaticPrefixProvider
from tiered_context.context.protocols import IContextCache, IPrefixProvider, ISizeEstimator, ISummarizer

__all__ = [
    "AggregatedContext",
    "ApproximateSizeEstimator",
    "BudgetEnforcer",
    "CallablePrefixProvider",
    "ContextAnalytics",
    "ContextEntry",
    "DegradationKind",
    "IContextCache",
    "IPrefixProvider",
    "ISizeEstimator",
    "ISummarizer",
    "Notice",
    "NullPrefixProvider",
    "OptimizationSummary",
    "StaticPrefixProvider",
    "SummarizedContent",
    "TierBlock",
    "TierUsage",
    "TiktokenSizeEstimator",
    "TokenBreakdown",
    "create_size_estimator",
    "format_context",
    "serialize_output",
]
