"""Hand-tuned tier assignments for targets that do not use the default.

Tuned on position in the dependency chain, required vs optional edges, and
the typical output size of each upstream artifact.
"""

from __future__ import annotations

from tiered_context.tiers.models import TierAssignment, TokenBudget

_PRODUCT = ("product-name", "product-description", "icp-analysis")

TIER_ASSIGNMENTS: tuple[TierAssignment, ...] = (
    # ── Core foundation ──────────────────────────────────────────────
    TierAssignment(
        target_id="icp-analysis",
        tier1_critical=("product-name", "product-description", "current-business-stage"),
        token_budget=TokenBudget.of(500, 0, 0),
    ),
    TierAssignment(
        target_id="target-buyer-personas",
        tier1_critical=_PRODUCT,
        tier3_optional=("refined-product-description",),
        token_budget=TokenBudget.of(500, 0, 500),
    ),
    TierAssignment(
        target_id="empathy-maps",
        tier1_critical=_PRODUCT,
        tier2_required=("target-buyer-personas",),
        tier3_optional=("refined-product-description", "value-messaging"),
        token_budget=TokenBudget.of(500, 1000, 500),
    ),
    TierAssignment(
        target_id="refined-product-description",
        tier1_critical=("product-name", "product-description", "primary-benefit"),
        tier3_optional=("icp-analysis",),
        token_budget=TokenBudget.of(500, 0, 300),
    ),
    TierAssignment(
        target_id="value-messaging",
        tier1_critical=_PRODUCT,
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "refined-product-description"),
        token_budget=TokenBudget.of(500, 1000, 800),
    ),
    # ── Buyer intelligence ───────────────────────────────────────────
    TierAssignment(
        target_id="icp-rating-system",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "value-messaging"),
        tier4_skip=("refined-product-description",),
        token_budget=TokenBudget.of(500, 1500, 500),
    ),
    TierAssignment(
        target_id="buyer-persona-rating",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "icp-rating-system"),
        tier4_skip=("refined-product-description", "value-messaging"),
        token_budget=TokenBudget.of(500, 1500, 500),
    ),
    TierAssignment(
        target_id="negative-buyer-personas",
        tier1_critical=_PRODUCT,
        tier3_optional=("target-buyer-personas", "empathy-maps"),
        tier4_skip=("refined-product-description", "value-messaging"),
        token_budget=TokenBudget.of(500, 0, 800),
    ),
    TierAssignment(
        target_id="non-ideal-customer-profile",
        tier1_critical=("product-description", "icp-analysis", "current-business-stage"),
        tier3_optional=("target-buyer-personas", "negative-buyer-personas"),
        tier4_skip=("refined-product-description", "value-messaging", "empathy-maps"),
        token_budget=TokenBudget.of(500, 0, 600),
    ),
    # ── Scoring & prioritization ─────────────────────────────────────
    TierAssignment(
        target_id="compelling-events",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas", "empathy-maps"),
        tier3_optional=("value-messaging", "icp-rating-system"),
        tier4_skip=("refined-product-description", "buyer-persona-rating", "negative-buyer-personas"),
        token_budget=TokenBudget.of(500, 2000, 500),
    ),
    TierAssignment(
        target_id="cost-of-inaction-calculator",
        tier1_critical=("product-description", "icp-analysis"),
        tier3_optional=("target-buyer-personas", "compelling-events", "empathy-maps"),
        tier4_skip=("refined-product-description", "value-messaging", "buyer-persona-rating"),
        token_budget=TokenBudget.of(500, 0, 1200),
    ),
    TierAssignment(
        target_id="product-potential-assessment",
        tier1_critical=("product-description", "startup-stage"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("icp-analysis", "value-messaging", "empathy-maps"),
        tier4_skip=("refined-product-description", "buyer-persona-rating"),
        token_budget=TokenBudget.of(500, 1200, 800),
    ),
    TierAssignment(
        target_id="product-value-statistics",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("value-messaging", "empathy-maps"),
        tier4_skip=("refined-product-description", "compelling-events"),
        token_budget=TokenBudget.of(500, 1200, 600),
    ),
    # ── Value communication ──────────────────────────────────────────
    TierAssignment(
        target_id="pmf-assessment",
        tier1_critical=("product-description", "icp-analysis", "startup-stage"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "value-messaging", "product-potential-assessment"),
        tier4_skip=("refined-product-description", "buyer-persona-rating", "icp-rating-system"),
        token_budget=TokenBudget.of(500, 1500, 1000),
    ),
    TierAssignment(
        target_id="pmf-readiness-assessment",
        tier1_critical=_PRODUCT,
        tier2_required=(
            "target-buyer-personas",
            "product-category",
            "product-unique-differentiator",
            "product-tangible-benefits",
        ),
        tier3_optional=("pmf-assessment", "value-messaging"),
        tier4_skip=("refined-product-description", "empathy-maps", "buyer-persona-rating"),
        token_budget=TokenBudget.of(500, 2000, 500),
    ),
    TierAssignment(
        target_id="potential-customers-list",
        tier1_critical=_PRODUCT,
        tier2_required=("pmf-assessment",),
        tier3_optional=("target-buyer-personas", "compelling-events", "icp-rating-system"),
        tier4_skip=(
            "refined-product-description",
            "empathy-maps",
            "value-messaging",
            "buyer-persona-rating",
        ),
        token_budget=TokenBudget.of(500, 1500, 1000),
    ),
    TierAssignment(
        target_id="willingness-to-pay",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas", "product-value-proposition"),
        tier3_optional=("value-messaging", "cost-of-inaction-calculator", "empathy-maps"),
        tier4_skip=("refined-product-description", "buyer-persona-rating", "icp-rating-system"),
        token_budget=TokenBudget.of(500, 1800, 700),
    ),
    # ── Sales enablement ─────────────────────────────────────────────
    TierAssignment(
        target_id="sales-slide-deck",
        tier1_critical=_PRODUCT,
        tier2_required=("target-buyer-personas", "value-messaging"),
        tier3_optional=(
            "empathy-maps",
            "compelling-events",
            "cost-of-inaction-calculator",
            "product-value-statistics",
        ),
        tier4_skip=(
            "refined-product-description",
            "buyer-persona-rating",
            "icp-rating-system",
            "negative-buyer-personas",
        ),
        token_budget=TokenBudget.of(500, 2000, 1000),
    ),
    TierAssignment(
        target_id="sales-tasks-basic",
        tier1_critical=("product-description", "startup-stage", "business-goal"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("icp-analysis", "value-messaging", "pmf-assessment"),
        tier4_skip=("refined-product-description", "empathy-maps", "buyer-persona-rating"),
        token_budget=TokenBudget.of(500, 1200, 800),
    ),
    TierAssignment(
        target_id="technical-sales-translator",
        tier1_critical=_PRODUCT,
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "value-messaging", "compelling-events"),
        tier4_skip=("refined-product-description", "buyer-persona-rating", "icp-rating-system"),
        token_budget=TokenBudget.of(500, 1500, 1000),
    ),
    TierAssignment(
        target_id="product-market-clarity-translation",
        tier1_critical=_PRODUCT,
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "desert-context", "compelling-events", "value-messaging"),
        tier4_skip=("refined-product-description", "buyer-persona-rating", "icp-rating-system"),
        token_budget=TokenBudget.of(500, 1500, 1200),
    ),
    # ── Advanced enterprise ──────────────────────────────────────────
    TierAssignment(
        target_id="buying-committee-navigation-guide",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("empathy-maps", "stakeholder-arsenal", "value-messaging"),
        tier4_skip=(
            "refined-product-description",
            "buyer-persona-rating",
            "icp-rating-system",
            "compelling-events",
        ),
        token_budget=TokenBudget.of(500, 1500, 1000),
    ),
    TierAssignment(
        target_id="day-in-life",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas", "empathy-maps"),
        tier3_optional=("user-journey-maps", "compelling-events"),
        tier4_skip=(
            "refined-product-description",
            "value-messaging",
            "buyer-persona-rating",
            "icp-rating-system",
        ),
        token_budget=TokenBudget.of(500, 2000, 500),
    ),
    TierAssignment(
        target_id="mock-selling-dialogues",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas", "value-messaging"),
        tier3_optional=("empathy-maps", "compelling-events", "sales-slide-deck"),
        tier4_skip=(
            "refined-product-description",
            "buyer-persona-rating",
            "icp-rating-system",
            "product-value-statistics",
        ),
        token_budget=TokenBudget.of(500, 2000, 1000),
    ),
    # ── Strategic planning ───────────────────────────────────────────
    TierAssignment(
        target_id="board-presentation",
        tier1_critical=_PRODUCT,
        tier2_required=(
            "target-buyer-personas",
            "value-messaging",
            "roi-models",
            "executive-business-case",
        ),
        tier3_optional=(
            "pmf-readiness-assessment",
            "compelling-events",
            "sales-slide-deck",
            "buyer-persona-rating",
        ),
        tier4_skip=(
            "refined-product-description",
            "empathy-maps",
            "technical-sales-translator",
            "product-potential-assessment",
            "icp-rating-system",
        ),
        token_budget=TokenBudget.of(500, 2000, 1000),
    ),
    TierAssignment(
        target_id="executive-business-case",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas", "value-messaging"),
        tier3_optional=("roi-models", "cost-of-inaction-calculator", "compelling-events"),
        tier4_skip=(
            "refined-product-description",
            "empathy-maps",
            "buyer-persona-rating",
            "icp-rating-system",
            "product-value-statistics",
        ),
        token_budget=TokenBudget.of(500, 2000, 1000),
    ),
    TierAssignment(
        target_id="roi-models",
        tier1_critical=("product-description", "icp-analysis"),
        tier2_required=("target-buyer-personas",),
        tier3_optional=("value-messaging", "cost-of-inaction-calculator", "willingness-to-pay"),
        tier4_skip=(
            "refined-product-description",
            "empathy-maps",
            "buyer-persona-rating",
            "icp-rating-system",
        ),
        token_budget=TokenBudget.of(500, 1500, 1000),
    ),
)
