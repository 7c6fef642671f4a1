"""Dependency planning: validation, generation order, and cost estimation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiered_context.planning.cost import calculate_generation_cost
from tiered_context.planning.models import (
    AvailableResource,
    BatchValidation,
    CostLine,
    DependencyValidation,
    GenerationCost,
)
from tiered_context.planning.ordering import dependency_closure, suggested_order
from tiered_context.planning.validator import (
    available_resources,
    recommended_next,
    validate_batch,
    validate_dependencies,
)

if TYPE_CHECKING:
    from tiered_context.core.types import AvailableIds
    from tiered_context.registry import ResourceRegistry

__all__ = [
    "AvailableResource",
    "BatchValidation",
    "CostLine",
    "DependencyPlanner",
    "DependencyValidation",
    "GenerationCost",
    "available_resources",
    "calculate_generation_cost",
    "dependency_closure",
    "recommended_next",
    "suggested_order",
    "validate_batch",
    "validate_dependencies",
]


class DependencyPlanner:
    """Read-only planning queries bound to one :class:`ResourceRegistry`."""

    def __init__(self, registry: ResourceRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ResourceRegistry:
        return self._registry

    def validate_dependencies(self, target_id: str, available_ids: AvailableIds = ()) -> DependencyValidation:
        return validate_dependencies(self._registry, target_id, available_ids)

    def validate_batch(self, target_ids: list[str], available_ids: AvailableIds = ()) -> BatchValidation:
        return validate_batch(self._registry, target_ids, available_ids)

    def calculate_generation_cost(self, target_id: str, available_ids: AvailableIds = ()) -> GenerationCost:
        return calculate_generation_cost(self._registry, target_id, available_ids)

    def suggested_order(self, target_id: str, available_ids: AvailableIds = ()) -> list[str]:
        return suggested_order(self._registry, target_id, available_ids)

    def available_resources(self, available_ids: AvailableIds = ()) -> list[AvailableResource]:
        return available_resources(self._registry, available_ids)

    def recommended_next(self, available_ids: AvailableIds = (), limit: int = 5) -> list[AvailableResource]:
        return recommended_next(self._registry, available_ids, limit)
