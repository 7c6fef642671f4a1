"""Immutable registry of artifact nodes and input fields.

Usage::

    from tiered_context.registry import build_default_registry

    registry = build_default_registry()
    node = registry.require("sales-slide-deck")
    print(node.required_dependencies)

The registry is built once at process start and passed by reference into the
planning functions and the aggregation engine.  All graph invariants are
checked at construction, so downstream code can assume an acyclic graph
whose required edges never point to a later tier.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from tiered_context.exceptions import RegistryError, UnknownResourceError
from tiered_context.registry.models import InputField, ResourceNode

log = logging.getLogger(__name__)


class ResourceRegistry:
    """Typed, read-only map of resource id -> :class:`ResourceNode`."""

    def __init__(
        self,
        nodes: Iterable[ResourceNode],
        inputs: Iterable[InputField] = (),
    ) -> None:
        node_map: dict[str, ResourceNode] = {}
        for node in nodes:
            if node.id in node_map:
                raise RegistryError(f"Duplicate resource id {node.id!r}")
            node_map[node.id] = node

        input_map: dict[str, InputField] = {}
        for field in inputs:
            if field.id in node_map or field.id in input_map:
                raise RegistryError(f"Input id {field.id!r} collides with another entry")
            input_map[field.id] = field

        self._nodes = MappingProxyType(node_map)
        self._inputs = MappingProxyType(input_map)
        self._order = {node_id: i for i, node_id in enumerate(node_map)}

        self._check_references()
        self._check_tier_ordering()
        self._check_acyclic()

        log.debug("Resource registry built: %d nodes, %d inputs", len(node_map), len(input_map))

    # ── Lookups ─────────────────────────────────────────────────────

    def get(self, resource_id: str) -> ResourceNode | None:
        """Return the node for *resource_id*, or None if it is not registered."""
        return self._nodes.get(resource_id)

    def require(self, resource_id: str) -> ResourceNode:
        """Return the node for *resource_id*.

        Raises:
            UnknownResourceError: If the id is not a registered node.
        """
        node = self._nodes.get(resource_id)
        if node is None:
            raise UnknownResourceError(resource_id)
        return node

    def contains(self, resource_id: str) -> bool:
        return resource_id in self._nodes

    __contains__ = contains

    def is_input(self, resource_id: str) -> bool:
        return resource_id in self._inputs

    def is_known(self, resource_id: str) -> bool:
        """True for registered nodes and declared input fields."""
        return resource_id in self._nodes or resource_id in self._inputs

    def display_name(self, resource_id: str) -> str:
        """Human-readable name for a node or input; falls back to the id."""
        node = self._nodes.get(resource_id)
        if node is not None:
            return node.name
        field = self._inputs.get(resource_id)
        return field.name if field is not None else resource_id

    def ids(self) -> list[str]:
        """Node ids in insertion order."""
        return list(self._nodes)

    def index_of(self, resource_id: str) -> int:
        """Insertion ordinal of a node, used as the topological tie-breaker."""
        try:
            return self._order[resource_id]
        except KeyError:
            raise UnknownResourceError(resource_id) from None

    def by_tier(self, tier: int) -> list[ResourceNode]:
        """Nodes in *tier*, sorted by name."""
        return sorted((n for n in self._nodes.values() if n.tier == tier), key=lambda n: n.name)

    def by_category(self, category: str) -> list[ResourceNode]:
        """Nodes in *category*, sorted by tier then name."""
        return sorted(
            (n for n in self._nodes.values() if n.category == category),
            key=lambda n: (n.tier, n.name),
        )

    def __iter__(self) -> Iterator[ResourceNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    # ── Construction-time checks ────────────────────────────────────

    def _check_references(self) -> None:
        for node in self._nodes.values():
            unknown = [d for d in node.all_dependencies if not self.is_known(d)]
            if unknown:
                raise RegistryError(
                    f"Resource {node.id!r} depends on unknown ids: {', '.join(unknown)}"
                )
            if node.id in node.all_dependencies:
                raise RegistryError(f"Resource {node.id!r} depends on itself")

    def _check_tier_ordering(self) -> None:
        for node in self._nodes.values():
            for dep_id in node.required_dependencies:
                dep = self._nodes.get(dep_id)
                if dep is not None and dep.tier > node.tier:
                    raise RegistryError(
                        f"Resource {node.id!r} (tier {node.tier}) requires "
                        f"{dep_id!r} from later tier {dep.tier}"
                    )

    def _check_acyclic(self) -> None:
        """Depth-first search with three-color marking over required edges."""
        white, grey, black = 0, 1, 2
        color = dict.fromkeys(self._nodes, white)

        for root in self._nodes:
            if color[root] != white:
                continue
            color[root] = grey
            path = [root]
            stack = [iter(self._required_nodes(root))]
            while stack:
                child = next(stack[-1], None)
                if child is None:
                    stack.pop()
                    color[path.pop()] = black
                    continue
                if color[child] == grey:
                    cycle = path[path.index(child):] + [child]
                    raise RegistryError(f"Dependency cycle: {' -> '.join(cycle)}")
                if color[child] == white:
                    color[child] = grey
                    path.append(child)
                    stack.append(iter(self._required_nodes(child)))

    def _required_nodes(self, node_id: str) -> list[str]:
        return [d for d in self._nodes[node_id].required_dependencies if d in self._nodes]


def build_default_registry() -> ResourceRegistry:
    """Build the registry from the bundled catalog."""
    from tiered_context.registry.catalog import INPUT_FIELDS, RESOURCE_NODES

    return ResourceRegistry(RESOURCE_NODES, INPUT_FIELDS)
