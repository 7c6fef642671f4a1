"""Artifact record model shared by every store backend."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator


class GeneratedArtifactRecord(BaseModel):
    """One artifact a user has already produced.

    ``output`` is either raw text or structured (JSON-compatible) content;
    ``output_summary`` is a short fallback used when ``output`` is empty.
    Naive ``produced_at`` timestamps are read as UTC.
    """

    id: str
    name: str
    produced_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    output: Any = None
    output_summary: str | None = None

    @field_validator("produced_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
