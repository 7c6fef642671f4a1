"""Required-dependency closure and stable topological generation order."""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tiered_context.exceptions import RegistryError

if TYPE_CHECKING:
    from tiered_context.core.types import AvailableIds
    from tiered_context.registry import ResourceRegistry

log = logging.getLogger(__name__)


@dataclass
class DependencyClosure:
    """Nodes that must be generated (target included) and inputs still missing."""

    target_id: str
    nodes: set[str] = field(default_factory=set)
    missing_inputs: set[str] = field(default_factory=set)


def dependency_closure(
    registry: ResourceRegistry,
    target_id: str,
    available_ids: AvailableIds = (),
) -> DependencyClosure:
    """Walk required edges from *target_id*, stopping at available ids.

    Optional edges are ignored.  A dependency that is already available is
    neither included nor expanded: its own prerequisites are irrelevant once
    it exists.  Input placeholders are collected separately because they are
    supplied by the user, not generated.
    """
    registry.require(target_id)
    available = set(available_ids)
    closure = DependencyClosure(target_id=target_id, nodes={target_id})

    stack = [target_id]
    while stack:
        node = registry.require(stack.pop())
        for dep_id in node.required_dependencies:
            if dep_id in available:
                continue
            if registry.is_input(dep_id):
                closure.missing_inputs.add(dep_id)
            elif dep_id not in closure.nodes:
                closure.nodes.add(dep_id)
                stack.append(dep_id)

    return closure


def topological_order(registry: ResourceRegistry, node_ids: set[str]) -> list[str]:
    """Kahn's algorithm over the required edges inside *node_ids*.

    Ready nodes are drawn from a min-heap keyed on registry insertion order,
    so the result is deterministic and prefers catalog order among peers.
    """
    in_degree = dict.fromkeys(node_ids, 0)
    dependents: dict[str, list[str]] = {node_id: [] for node_id in node_ids}

    for node_id in node_ids:
        for dep_id in registry.require(node_id).required_dependencies:
            if dep_id in node_ids:
                in_degree[node_id] += 1
                dependents[dep_id].append(node_id)

    ready = [(registry.index_of(n), n) for n, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)

    ordered: list[str] = []
    while ready:
        _, node_id = heapq.heappop(ready)
        ordered.append(node_id)
        for child in dependents[node_id]:
            in_degree[child] -= 1
            if in_degree[child] == 0:
                heapq.heappush(ready, (registry.index_of(child), child))

    # Only reachable with a registry that skipped its acyclicity check
    if len(ordered) != len(node_ids):
        raise RegistryError("Cycle detected while ordering dependencies")
    return ordered


def suggested_order(
    registry: ResourceRegistry,
    target_id: str,
    available_ids: AvailableIds = (),
) -> list[str]:
    """Ordered ids to generate so that *target_id* can be produced last."""
    closure = dependency_closure(registry, target_id, available_ids)
    order = topological_order(registry, closure.nodes)
    log.debug("Suggested order for %s: %s", target_id, order)
    return order
