"""Opaque prefix providers placed ahead of every tier block."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from tiered_context.stores.models import GeneratedArtifactRecord


class NullPrefixProvider:
    """No prefix section."""

    def render(self, records: Sequence[GeneratedArtifactRecord]) -> str:
        return ""


class StaticPrefixProvider:
    """Same pre-formatted block for every request."""

    def __init__(self, text: str) -> None:
        self._text = text

    def render(self, records: Sequence[GeneratedArtifactRecord]) -> str:
        return self._text


class CallablePrefixProvider:
    """Adapts a plain function over the user's records, e.g. a text-block extractor."""

    def __init__(self, func: Callable[[Sequence[GeneratedArtifactRecord]], str]) -> None:
        self._func = func

    def render(self, records: Sequence[GeneratedArtifactRecord]) -> str:
        return self._func(records) or ""
