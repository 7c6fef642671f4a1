"""Artifact dependency registry: node catalog and graph-invariant checks."""

from __future__ import annotations

from tiered_context.registry.models import InputField, ResourceNode
from tiered_context.registry.resource_registry import ResourceRegistry, build_default_registry

__all__ = [
    "InputField",
    "ResourceNode",
    "ResourceRegistry",
    "build_default_registry",
]
