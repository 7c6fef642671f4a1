"""Tier-3 summarization: factory + backend implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiered_context.context.protocols import ISizeEstimator, ISummarizer
from tiered_context.context.summarization.heuristic import TRUNCATION_MARKER, HeuristicSummarizer
from tiered_context.context.summarization.passthrough import PassthroughSummarizer

if TYPE_CHECKING:
    from tiered_context.core.config import AggregationConfig

__all__ = [
    "TRUNCATION_MARKER",
    "HeuristicSummarizer",
    "PassthroughSummarizer",
    "create_summarizer",
]


def create_summarizer(
    settings: object | None = None,
    estimator: ISizeEstimator | None = None,
) -> ISummarizer:
    """Create a summarizer from settings.

    Args:
        settings: An ``AppSettings`` or ``AggregationConfig`` instance.
            If None, returns HeuristicSummarizer with defaults.
        estimator: Size estimator shared with the budget enforcer.
    """
    config: AggregationConfig | None = None

    if settings is not None:
        config = getattr(settings, "aggregation", None)
        if config is None and hasattr(settings, "summary_max_fields"):
            config = settings  # type: ignore[assignment]

    if config is None:
        return HeuristicSummarizer(estimator)

    if config.summarizer == "passthrough":
        return PassthroughSummarizer(estimator)
    elif config.summarizer == "heuristic":
        return HeuristicSummarizer(
            estimator,
            max_fields=config.summary_max_fields,
            max_string_chars=config.summary_max_string_chars,
        )
    else:
        raise ValueError(f"Unknown summarizer: {config.summarizer!r}")
