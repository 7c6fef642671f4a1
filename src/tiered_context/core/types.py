"""Shared type aliases for the framework layer."""

from __future__ import annotations

from collections.abc import Iterable

# Artifact / resource identifier (e.g. ``"icp-analysis"``)
ResourceId = str

# Anything the planning functions accept as "ids the user already has"
AvailableIds = Iterable[ResourceId]
