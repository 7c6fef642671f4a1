"""Tier assignment models: which dependency goes into which tier, and budgets."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from itertools import combinations

from tiered_context.exceptions import TierConfigError

TIER_NAMES = ("tier1_critical", "tier2_required", "tier3_optional", "tier4_skip")


@dataclass(frozen=True)
class TokenBudget:
    """Per-tier token budgets; ``total`` must equal the sum of the three tiers."""

    tier1: int
    tier2: int
    tier3: int
    total: int

    def __post_init__(self) -> None:
        if min(self.tier1, self.tier2, self.tier3) < 0:
            raise TierConfigError(f"Token budgets must be non-negative: {self}")
        computed = self.tier1 + self.tier2 + self.tier3
        if computed != self.total:
            raise TierConfigError(
                f"Token budget mismatch: tier1({self.tier1}) + tier2({self.tier2}) + "
                f"tier3({self.tier3}) = {computed}, but total is {self.total}"
            )

    @classmethod
    def of(cls, tier1: int, tier2: int, tier3: int) -> TokenBudget:
        """Build a budget with ``total`` derived from the tiers."""
        return cls(tier1=tier1, tier2=tier2, tier3=tier3, total=tier1 + tier2 + tier3)

    def for_tier(self, tier: int) -> int:
        return (self.tier1, self.tier2, self.tier3)[tier - 1]


@dataclass(frozen=True)
class TierAssignment:
    """Disjoint mapping of a target's dependency ids into four tiers."""

    target_id: str
    tier1_critical: tuple[str, ...] = ()
    tier2_required: tuple[str, ...] = ()
    tier3_optional: tuple[str, ...] = ()
    tier4_skip: tuple[str, ...] = ()
    token_budget: TokenBudget = field(default_factory=lambda: TokenBudget.of(500, 2000, 1000))

    def __post_init__(self) -> None:
        overlaps = find_tier_overlaps(self.tier_lists())
        if overlaps:
            raise TierConfigError(f"Tier assignment for {self.target_id!r} overlaps: {'; '.join(overlaps)}")

    def tier_ids(self, tier: int) -> tuple[str, ...]:
        """Ids assigned to tier 1..4."""
        return getattr(self, TIER_NAMES[tier - 1])

    def tier_lists(self) -> dict[str, tuple[str, ...]]:
        return {name: getattr(self, name) for name in TIER_NAMES}

    def all_ids(self) -> tuple[str, ...]:
        return self.tier1_critical + self.tier2_required + self.tier3_optional + self.tier4_skip


def find_tier_overlaps(lists: Mapping[str, Sequence[str]]) -> list[str]:
    """Describe every id that appears in more than one tier (or twice in one)."""
    problems: list[str] = []
    for name in TIER_NAMES:
        ids = list(lists.get(name, ()))
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            problems.append(f"duplicated in {name}: {', '.join(dupes)}")
    for first, second in combinations(TIER_NAMES, 2):
        shared = sorted(set(lists.get(first, ())) & set(lists.get(second, ())))
        if shared:
            problems.append(f"in both {first} and {second}: {', '.join(shared)}")
    return problems
