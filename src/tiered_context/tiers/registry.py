"""Per-target tier assignments with default synthesis.

A target with a hand-tuned :class:`TierAssignment` uses it verbatim.  Any
other registered target gets a default built from its dependency lists:
the product basics (plus ICP analysis when required) are critical, the
remaining required dependencies are tier 2, the first three optional
dependencies are summarized in tier 3, and the rest are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tiered_context.exceptions import TierConfigError
from tiered_context.tiers.models import TIER_NAMES, TierAssignment, TokenBudget, find_tier_overlaps

if TYPE_CHECKING:
    from tiered_context.registry import ResourceRegistry

log = logging.getLogger(__name__)

PRODUCT_NAME_ID = "product-name"
PRODUCT_DESCRIPTION_ID = "product-description"
ICP_ANALYSIS_ID = "icp-analysis"

DEFAULT_TOKEN_BUDGET = TokenBudget.of(500, 2000, 1000)
DEFAULT_OPTIONAL_SLOTS = 3
MAX_RECOMMENDED_TOTAL = 4000


@dataclass
class TierConfigReport:
    """Outcome of :func:`validate_tier_assignment`."""

    target_id: str
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_tier_assignment(
    assignment: TierAssignment | Mapping[str, Any],
    *,
    max_recommended_total: int = MAX_RECOMMENDED_TOTAL,
    registry: ResourceRegistry | None = None,
) -> TierConfigReport:
    """Collect every problem with *assignment* without raising.

    Accepts either a built :class:`TierAssignment` or its raw mapping form
    (``{"target_id": ..., "tier1_critical": [...], "token_budget": {...}}``),
    so catalog data can be checked before construction would reject it.
    """
    raw = _as_mapping(assignment)
    report = TierConfigReport(target_id=str(raw.get("target_id", "")))

    budget = raw.get("token_budget") or {}
    tiers = [int(budget.get(k, 0)) for k in ("tier1", "tier2", "tier3")]
    total = int(budget.get("total", sum(tiers)))
    if sum(tiers) != total:
        report.errors.append(
            f"Token budget mismatch: tier1({tiers[0]}) + tier2({tiers[1]}) + "
            f"tier3({tiers[2]}) = {sum(tiers)}, but total is {total}"
        )
    if any(t < 0 for t in tiers):
        report.errors.append("Token budgets must be non-negative")
    if total > max_recommended_total:
        report.warnings.append(
            f"Total budget ({total}) exceeds recommended maximum ({max_recommended_total})"
        )

    lists = {name: tuple(raw.get(name) or ()) for name in TIER_NAMES}
    report.errors.extend(f"Tier overlap {p}" for p in find_tier_overlaps(lists))

    if registry is not None:
        if registry.get(report.target_id) is None:
            report.errors.append(f"Target {report.target_id!r} is not a registered resource")
        unknown = sorted({i for ids in lists.values() for i in ids if not registry.is_known(i)})
        if unknown:
            report.errors.append(f"Unknown dependency ids: {', '.join(unknown)}")

    return report


class TierConfigRegistry:
    """Read-only lookup of tier assignments keyed by target id."""

    def __init__(
        self,
        resources: ResourceRegistry,
        assignments: Iterable[TierAssignment] = (),
        *,
        default_budget: TokenBudget = DEFAULT_TOKEN_BUDGET,
        max_recommended_total: int = MAX_RECOMMENDED_TOTAL,
    ) -> None:
        self._resources = resources
        self._default_budget = default_budget

        explicit: dict[str, TierAssignment] = {}
        for assignment in assignments:
            if assignment.target_id in explicit:
                raise TierConfigError(f"Duplicate tier assignment for {assignment.target_id!r}")
            report = validate_tier_assignment(
                assignment,
                max_recommended_total=max_recommended_total,
                registry=resources,
            )
            if not report.valid:
                raise TierConfigError("; ".join(report.errors))
            for warning in report.warnings:
                log.warning("Tier config %s: %s", assignment.target_id, warning)
            explicit[assignment.target_id] = assignment
        self._explicit = explicit

    def get(self, target_id: str) -> TierAssignment | None:
        """Return the hand-tuned assignment for *target_id*, if any."""
        return self._explicit.get(target_id)

    def has_explicit(self, target_id: str) -> bool:
        return target_id in self._explicit

    def resolve(self, target_id: str) -> tuple[TierAssignment, bool]:
        """Return ``(assignment, is_default)`` for a registered target.

        Raises:
            UnknownResourceError: If *target_id* is not a registered node.
        """
        node = self._resources.require(target_id)
        explicit = self._explicit.get(target_id)
        if explicit is not None:
            return explicit, False

        tier1 = [PRODUCT_NAME_ID, PRODUCT_DESCRIPTION_ID]
        if ICP_ANALYSIS_ID in node.required_dependencies:
            tier1.append(ICP_ANALYSIS_ID)
        tier2 = [d for d in node.required_dependencies if d not in tier1]
        optional = [d for d in node.optional_dependencies if d not in tier1 and d not in tier2]

        assignment = TierAssignment(
            target_id=target_id,
            tier1_critical=tuple(tier1),
            tier2_required=tuple(tier2),
            tier3_optional=tuple(optional[:DEFAULT_OPTIONAL_SLOTS]),
            tier4_skip=tuple(optional[DEFAULT_OPTIONAL_SLOTS:]),
            token_budget=self._default_budget,
        )
        return assignment, True

    def assignments(self) -> list[TierAssignment]:
        """Hand-tuned assignments in registration order."""
        return list(self._explicit.values())

    def target_ids(self) -> list[str]:
        """Targets with a hand-tuned assignment, in registration order."""
        return list(self._explicit)

    def __len__(self) -> int:
        return len(self._explicit)


def build_default_tier_configs(
    resources: ResourceRegistry,
    settings: object | None = None,
    assignments: Iterable[TierAssignment] | None = None,
) -> TierConfigRegistry:
    """Build the tier registry, by default from the bundled catalog.

    Args:
        resources: The resource registry targets are checked against.
        settings: An ``AppSettings`` or ``AggregationConfig``; supplies the
            default budget and the recommended maximum total.
        assignments: Hand-tuned assignments to load instead of the catalog's.
    """
    if assignments is None:
        from tiered_context.tiers.catalog import TIER_ASSIGNMENTS

        assignments = TIER_ASSIGNMENTS

    config = getattr(settings, "aggregation", settings) if settings is not None else None
    if config is None or not hasattr(config, "default_tier1_budget"):
        return TierConfigRegistry(resources, assignments)

    return TierConfigRegistry(
        resources,
        assignments,
        default_budget=TokenBudget.of(
            config.default_tier1_budget,
            config.default_tier2_budget,
            config.default_tier3_budget,
        ),
        max_recommended_total=config.max_recommended_total,
    )


def _as_mapping(assignment: TierAssignment | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(assignment, Mapping):
        return assignment
    budget = assignment.token_budget
    return {
        "target_id": assignment.target_id,
        **assignment.tier_lists(),
        "token_budget": {
            "tier1": budget.tier1,
            "tier2": budget.tier2,
            "tier3": budget.tier3,
            "total": budget.total,
        },
    }
