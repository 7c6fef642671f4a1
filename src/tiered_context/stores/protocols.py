"""Artifact store protocol: read-only access to a user's produced artifacts."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tiered_context.stores.models import GeneratedArtifactRecord


@runtime_checkable
class IArtifactStore(Protocol):
    """Protocol for artifact store backends (memory, file, database, ...)."""

    async def list_artifacts(self, user_id: str) -> list[GeneratedArtifactRecord]:
        """All records owned by *user_id*, ascending by ``produced_at``.

        Raises:
            ArtifactStoreError: If the backing store cannot be read.
        """
        ...

    async def list_artifact_ids(self, user_id: str) -> list[str]:
        """Ids of every record owned by *user_id* (may contain duplicates)."""
        ...
