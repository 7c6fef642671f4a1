"""Per-tier content blocks under token budgets.

Hard tiers (1 and 2) are a completeness guarantee: every configured
dependency the user has is included verbatim, and overflowing the budget
is reported but never enforced.  The lossy tier (3) summarizes each item
and then evicts the largest entries until the block fits.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping, Sequence

from tiered_context.context.models import ContextEntry, DegradationKind, Notice
from tiered_context.context.protocols import ISizeEstimator, ISummarizer
from tiered_context.stores.models import GeneratedArtifactRecord

log = logging.getLogger(__name__)

NO_OUTPUT_PLACEHOLDER = "[No output available]"


def serialize_output(record: GeneratedArtifactRecord) -> str:
    """Render a record's content as prompt text.

    Strings pass through, structured output is pretty-printed JSON, and an
    empty output falls back to ``output_summary``.
    """
    output = record.output
    if isinstance(output, str):
        return output
    if output is not None:
        return json.dumps(output, indent=2, ensure_ascii=False, default=str)
    if record.output_summary:
        return record.output_summary
    return NO_OUTPUT_PLACEHOLDER


@dataclasses.dataclass
class TierBlock:
    """Entries selected for one tier plus what was dropped along the way."""

    tier: int
    budget: int
    entries: list[ContextEntry] = dataclasses.field(default_factory=list)
    notices: list[Notice] = dataclasses.field(default_factory=list)
    evicted_ids: list[str] = dataclasses.field(default_factory=list)

    @property
    def tokens(self) -> int:
        return sum(e.token_count for e in self.entries)


class BudgetEnforcer:
    """Builds tier blocks from a user's records with a shared size estimator."""

    def __init__(
        self,
        estimator: ISizeEstimator,
        summarizer: ISummarizer,
        *,
        summary_target_tokens: int = 200,
    ) -> None:
        self._estimator = estimator
        self._summarizer = summarizer
        self._summary_target_tokens = summary_target_tokens

    def build_hard_tier(
        self,
        tier: int,
        dependency_ids: Sequence[str],
        records: Mapping[str, GeneratedArtifactRecord],
        budget: int,
    ) -> TierBlock:
        """Include every available dependency verbatim; never drop for size."""
        block = TierBlock(tier=tier, budget=budget)

        for dep_id in dependency_ids:
            record = records.get(dep_id)
            if record is None:
                log.warning("Tier %d dependency %s not found for user; skipping", tier, dep_id)
                block.notices.append(
                    Notice(kind=DegradationKind.DEPENDENCY_MISSING, resource_id=dep_id, detail=f"tier {tier}")
                )
                continue
            content = serialize_output(record)
            block.entries.append(
                ContextEntry(
                    id=record.id,
                    name=record.name or record.id,
                    content=content,
                    token_count=self._estimator.estimate(content),
                )
            )

        if block.tokens > budget:
            log.warning("Tier %d context exceeds budget: %d > %d, keeping all", tier, block.tokens, budget)
            block.notices.append(
                Notice(
                    kind=DegradationKind.BUDGET_EXCEEDED,
                    detail=f"tier {tier}: {block.tokens} > {budget} tokens",
                )
            )
        return block

    def build_lossy_tier(
        self,
        dependency_ids: Sequence[str],
        records: Mapping[str, GeneratedArtifactRecord],
        budget: int,
    ) -> TierBlock:
        """Summarize each available dependency, then evict the largest until it fits."""
        block = TierBlock(tier=3, budget=budget)

        for dep_id in dependency_ids:
            record = records.get(dep_id)
            if record is None:
                log.info("Tier 3 dependency %s not found for user; skipping", dep_id)
                block.notices.append(
                    Notice(kind=DegradationKind.DEPENDENCY_MISSING, resource_id=dep_id, detail="tier 3")
                )
                continue
            summary = self._summarizer.summarize(
                serialize_output(record), target_tokens=self._summary_target_tokens
            )
            if summary.malformed:
                log.warning("Malformed structured content in %s; fell back to raw truncation", dep_id)
                block.notices.append(
                    Notice(
                        kind=DegradationKind.MALFORMED_CONTENT,
                        resource_id=dep_id,
                        detail="unparsable JSON, raw truncation used",
                    )
                )
            block.entries.append(
                ContextEntry(
                    id=record.id,
                    name=record.name or record.id,
                    content=summary.text,
                    token_count=self._estimator.estimate(summary.text),
                    summarized=True,
                )
            )

        self._evict_to_budget(block)
        return block

    @staticmethod
    def _evict_to_budget(block: TierBlock) -> None:
        total = block.tokens
        if total <= block.budget:
            return

        # sorted() is stable: among equal sizes the earlier-configured entry goes first
        evicted: set[int] = set()
        by_size = sorted(range(len(block.entries)), key=lambda i: block.entries[i].token_count, reverse=True)
        for index in by_size:
            if total <= block.budget:
                break
            entry = block.entries[index]
            evicted.add(index)
            total -= entry.token_count
            log.info("Evicting tier 3 entry %s (%d tokens) to stay within budget", entry.id, entry.token_count)
            block.evicted_ids.append(entry.id)
            block.notices.append(
                Notice(
                    kind=DegradationKind.EVICTED,
                    resource_id=entry.id,
                    detail=f"{entry.token_count} tokens dropped, tier 3 budget {block.budget}",
                )
            )

        block.entries = [e for i, e in enumerate(block.entries) if i not in evicted]
