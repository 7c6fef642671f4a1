"""Prompt-ready text for an aggregated context.

Fixed order: opaque prefix, critical foundation, required dependencies,
then the summarized optional block.  Empty sections are omitted.
"""

from __future__ import annotations

from collections.abc import Sequence

from tiered_context.context.models import ContextEntry

PREFIX_SEPARATOR = "\n---\n\n"
TIER1_HEADING = "## CRITICAL FOUNDATION CONTEXT"
TIER2_HEADING = "## REQUIRED DEPENDENCIES CONTEXT"
TIER3_HEADING = "## OPTIONAL ENHANCEMENT CONTEXT (Summarized)"


def format_context(
    tier1: Sequence[ContextEntry],
    tier2: Sequence[ContextEntry],
    tier3: Sequence[ContextEntry],
    prefix: str = "",
) -> str:
    parts: list[str] = []
    if prefix:
        parts.append(prefix + PREFIX_SEPARATOR)
    parts.append(_section(TIER1_HEADING, tier1))
    parts.append(_section(TIER2_HEADING, tier2))
    parts.append(_section(TIER3_HEADING, tier3, suffix=" (Summary)"))
    return "".join(parts)


def _section(heading: str, entries: Sequence[ContextEntry], suffix: str = "") -> str:
    if not entries:
        return ""
    body = "".join(f"### {e.name}{suffix}\n{e.content}\n\n" for e in entries)
    return f"{heading}\n\n{body}"
