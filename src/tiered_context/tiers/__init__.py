"""Tier assignments: which dependencies are critical, required, summarized, or skipped."""

from __future__ import annotations

from tiered_context.tiers.models import TIER_NAMES, TierAssignment, TokenBudget
from tiered_context.tiers.registry import (
    DEFAULT_TOKEN_BUDGET,
    TierConfigRegistry,
    TierConfigReport,
    build_default_tier_configs,
    validate_tier_assignment,
)

__all__ = [
    "DEFAULT_TOKEN_BUDGET",
    "TIER_NAMES",
    "TierAssignment",
    "TierConfigRegistry",
    "TierConfigReport",
    "TokenBudget",
    "build_default_tier_configs",
    "validate_tier_assignment",
]
