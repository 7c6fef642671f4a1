"""Dependency validation: id-membership checks against the registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tiered_context.planning.cost import calculate_generation_cost
from tiered_context.planning.models import (
    AvailableResource,
    BatchSummary,
    BatchValidation,
    DependencyValidation,
)

if TYPE_CHECKING:
    from tiered_context.core.types import AvailableIds
    from tiered_context.registry import ResourceNode, ResourceRegistry

log = logging.getLogger(__name__)


def validate_dependencies(
    registry: ResourceRegistry,
    target_id: str,
    available_ids: AvailableIds = (),
) -> DependencyValidation:
    """Report required and optional dependencies of *target_id* not yet available.

    Only id membership is checked; artifact content is never inspected.

    Raises:
        UnknownResourceError: If *target_id* is not a registered node.
    """
    node = registry.require(target_id)
    available = set(available_ids)

    missing_required = [d for d in node.required_dependencies if d not in available]
    missing_optional = [d for d in node.optional_dependencies if d not in available]

    return DependencyValidation(
        target_id=node.id,
        target_name=node.name,
        valid=not missing_required,
        missing_required=missing_required,
        missing_optional=missing_optional,
    )


def validate_batch(
    registry: ResourceRegistry,
    target_ids: list[str],
    available_ids: AvailableIds = (),
) -> BatchValidation:
    """Validate several targets against the same set of available ids."""
    available = set(available_ids)
    validations = [validate_dependencies(registry, t, available) for t in target_ids]
    total_cost = sum(calculate_generation_cost(registry, t, available).total_cost for t in target_ids)
    valid_count = sum(1 for v in validations if v.valid)

    return BatchValidation(
        valid=valid_count == len(validations),
        validations=validations,
        summary=BatchSummary(
            total=len(validations),
            valid=valid_count,
            invalid=len(validations) - valid_count,
            total_cost=total_cost,
        ),
    )


def available_resources(
    registry: ResourceRegistry,
    available_ids: AvailableIds = (),
) -> list[AvailableResource]:
    """Resources not yet produced whose required dependencies are all present.

    Sorted by tier (foundational first), then by name.
    """
    available = set(available_ids)
    result: list[AvailableResource] = []

    for node in registry:
        if node.id in available:
            continue
        validation = validate_dependencies(registry, node.id, available)
        if validation.valid:
            result.append(_to_available(node, len(validation.missing_optional)))

    result.sort(key=lambda r: (r.tier, r.resource_name))
    log.debug("%d resources available from %d produced ids", len(result), len(available))
    return result


def recommended_next(
    registry: ResourceRegistry,
    available_ids: AvailableIds = (),
    limit: int = 5,
) -> list[AvailableResource]:
    """Highest-value resources to generate next.

    Priority: lower tier first, then resources with no optional gaps, then
    the ``core`` category.
    """

    def priority(resource: AvailableResource) -> int:
        score = (10 - resource.tier) * 1000
        if not resource.has_optional_missing:
            score += 100
        if resource.category == "core":
            score += 50
        return score

    candidates = available_resources(registry, available_ids)
    # sorted() is stable, so equal scores keep the tier/name order
    return sorted(candidates, key=priority, reverse=True)[:limit]


def _to_available(node: ResourceNode, optional_missing: int) -> AvailableResource:
    return AvailableResource(
        resource_id=node.id,
        resource_name=node.name,
        tier=node.tier,
        category=node.category,
        estimated_cost=node.generation_cost,
        estimated_tokens=node.estimated_tokens,
        impact_statement=node.impact_statement,
        optional_missing_count=optional_missing,
    )
