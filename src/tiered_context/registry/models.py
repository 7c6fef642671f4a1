"""Resource node definitions for the artifact dependency graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ResourceCategory = Literal["core", "advanced", "strategic"]


@dataclass(frozen=True)
class ResourceNode:
    """One generatable artifact type.

    ``required_dependencies`` and ``optional_dependencies`` hold either other
    node ids or raw input field ids (see ``INPUT_FIELDS``).
    """

    id: str
    name: str
    tier: int
    category: ResourceCategory
    required_dependencies: tuple[str, ...] = ()
    optional_dependencies: tuple[str, ...] = ()
    estimated_tokens: int = 0
    generation_cost: float = 0.0
    impact_statement: str = ""

    @property
    def all_dependencies(self) -> tuple[str, ...]:
        """Required followed by optional dependency ids."""
        return self.required_dependencies + self.optional_dependencies


@dataclass(frozen=True)
class InputField:
    """A raw user-supplied field (product name, business stage, ...).

    Inputs satisfy dependencies but are never generated, so they carry no
    cost and never appear in a generation order.
    """

    id: str
    name: str
    description: str = ""
