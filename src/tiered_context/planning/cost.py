"""Generation cost estimation over the missing required-dependency closure."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiered_context.planning.models import CostLine, GenerationCost
from tiered_context.planning.ordering import dependency_closure, topological_order

if TYPE_CHECKING:
    from tiered_context.core.types import AvailableIds
    from tiered_context.registry import ResourceRegistry


def calculate_generation_cost(
    registry: ResourceRegistry,
    target_id: str,
    available_ids: AvailableIds = (),
) -> GenerationCost:
    """Total cost to produce *target_id*, generating every missing prerequisite.

    Missing dependencies are listed in generation order.  Missing input
    fields carry no cost and do not count towards ``resource_count``.
    """
    closure = dependency_closure(registry, target_id, available_ids)
    order = topological_order(registry, closure.nodes)

    lines = [_cost_line(registry, node_id) for node_id in order]
    target_line = lines[-1]

    return GenerationCost(
        target=target_line,
        missing_dependencies=lines[:-1],
        missing_inputs=sorted(closure.missing_inputs, key=str),
        total_cost=round(sum(line.cost for line in lines), 6),
        total_estimated_tokens=sum(line.estimated_tokens for line in lines),
        resource_count=len(lines),
    )


def _cost_line(registry: ResourceRegistry, node_id: str) -> CostLine:
    node = registry.require(node_id)
    return CostLine(
        resource_id=node.id,
        resource_name=node.name,
        cost=node.generation_cost,
        estimated_tokens=node.estimated_tokens,
    )
