"""Passthrough summarizer: returns input unchanged."""

from __future__ import annotations

from tiered_context.context.estimators import ApproximateSizeEstimator
from tiered_context.context.models import SummarizedContent
from tiered_context.context.protocols import ISizeEstimator


class PassthroughSummarizer:
    """Keeps tier-3 content verbatim; eviction alone enforces the budget."""

    def __init__(self, estimator: ISizeEstimator | None = None) -> None:
        self._estimator = estimator or ApproximateSizeEstimator()

    def summarize(self, text: str, *, target_tokens: int) -> SummarizedContent:
        tokens = self._estimator.estimate(text)
        return SummarizedContent(
            text=text,
            original_tokens=tokens,
            summarized_tokens=tokens,
            method="passthrough",
        )
