"""Deterministic stand-in for model-based summarization.

Structured (JSON object) content keeps its first few top-level fields with
long strings clipped and arrays replaced by a length descriptor.  Anything
else is cut proportionally and tagged with an explicit truncation marker.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from tiered_context.context.estimators import ApproximateSizeEstimator
from tiered_context.context.models import SummarizedContent
from tiered_context.context.protocols import ISizeEstimator

log = logging.getLogger(__name__)

TRUNCATION_MARKER = "... [truncated for context optimization]"


class HeuristicSummarizer:
    """Field-pruning for JSON objects, proportional truncation otherwise."""

    def __init__(
        self,
        estimator: ISizeEstimator | None = None,
        *,
        max_fields: int = 5,
        max_string_chars: int = 100,
    ) -> None:
        self._estimator = estimator or ApproximateSizeEstimator()
        self._max_fields = max_fields
        self._max_string_chars = max_string_chars

    def summarize(self, text: str, *, target_tokens: int) -> SummarizedContent:
        current = self._estimator.estimate(text)
        if current <= target_tokens:
            return SummarizedContent(
                text=text,
                original_tokens=current,
                summarized_tokens=current,
                method="passthrough",
            )

        malformed = False
        stripped = text.strip()
        if stripped.startswith(("{", "[")):
            try:
                parsed = json.loads(stripped)
            except ValueError:
                log.debug("Content looks like JSON but does not parse; truncating raw text")
                malformed = True
            else:
                if isinstance(parsed, dict):
                    pruned = json.dumps(self._prune(parsed), indent=2, ensure_ascii=False)
                    return SummarizedContent(
                        text=pruned,
                        original_tokens=current,
                        summarized_tokens=self._estimator.estimate(pruned),
                        method="json_fields",
                    )

        keep = math.floor(len(text) * target_tokens / current)
        truncated = text[:keep] + TRUNCATION_MARKER
        return SummarizedContent(
            text=truncated,
            original_tokens=current,
            summarized_tokens=self._estimator.estimate(truncated),
            method="truncate",
            malformed=malformed,
        )

    def _prune(self, data: dict[str, Any]) -> dict[str, Any]:
        summary: dict[str, Any] = {}
        for key in list(data)[: self._max_fields]:
            value = data[key]
            if isinstance(value, str) and len(value) > self._max_string_chars:
                summary[key] = value[: self._max_string_chars] + "..."
            elif isinstance(value, list):
                summary[key] = f"[Array of {len(value)} items]"
            else:
                summary[key] = value
        return summary
