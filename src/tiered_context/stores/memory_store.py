"""In-memory artifact store: dict-backed, ideal for tests and the CLI."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tiered_context.stores.models import GeneratedArtifactRecord

log = logging.getLogger(__name__)


class MemoryArtifactStore:
    """Keeps each user's records in a plain list; nothing touches disk."""

    def __init__(self, records: dict[str, Iterable[GeneratedArtifactRecord]] | None = None) -> None:
        self._store: dict[str, list[GeneratedArtifactRecord]] = {}
        for user_id, user_records in (records or {}).items():
            for record in user_records:
                self.add(user_id, record)

    def add(self, user_id: str, record: GeneratedArtifactRecord) -> None:
        self._store.setdefault(user_id, []).append(record)
        log.debug("Added artifact %s for user %s", record.id, user_id)

    def remove(self, user_id: str, artifact_id: str) -> int:
        """Drop every record with *artifact_id*; returns how many were removed."""
        records = self._store.get(user_id, [])
        kept = [r for r in records if r.id != artifact_id]
        self._store[user_id] = kept
        return len(records) - len(kept)

    def replace_output(self, user_id: str, artifact_id: str, output: object) -> None:
        """Edit a record's content in place, keeping its id and timestamp."""
        records = self._store.get(user_id, [])
        self._store[user_id] = [
            r.model_copy(update={"output": output}) if r.id == artifact_id else r for r in records
        ]

    async def list_artifacts(self, user_id: str) -> list[GeneratedArtifactRecord]:
        return sorted(self._store.get(user_id, []), key=lambda r: r.produced_at)

    async def list_artifact_ids(self, user_id: str) -> list[str]:
        return [r.id for r in await self.list_artifacts(user_id)]
