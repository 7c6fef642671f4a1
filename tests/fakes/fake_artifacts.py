"""Artifact record builders and store fakes for testing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from tiered_context.exceptions import ArtifactStoreError
from tiered_context.stores.models import GeneratedArtifactRecord

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_record(
    artifact_id: str,
    output: Any = None,
    *,
    name: str | None = None,
    minute: int = 0,
    summary: str | None = None,
) -> GeneratedArtifactRecord:
    """Build a record produced *minute* minutes after a fixed base time."""
    return GeneratedArtifactRecord(
        id=artifact_id,
        name=name or artifact_id.replace("-", " ").title(),
        produced_at=BASE_TIME + timedelta(minutes=minute),
        output=output,
        output_summary=summary,
    )


def text_of_tokens(tokens: int, char: str = "x") -> str:
    """Text whose approximate size is exactly *tokens* (4 chars per token)."""
    return char * (tokens * 4)


class FailingArtifactStore:
    """Store whose backing database is down."""

    async def list_artifacts(self, user_id: str) -> list[GeneratedArtifactRecord]:
        raise ArtifactStoreError(f"database unavailable for {user_id}")

    async def list_artifact_ids(self, user_id: str) -> list[str]:
        raise ArtifactStoreError(f"database unavailable for {user_id}")
