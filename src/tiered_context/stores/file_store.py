"""File-based artifact store: one JSON array of records per user."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from tiered_context.exceptions import ArtifactStoreError
from tiered_context.stores.models import GeneratedArtifactRecord

log = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[GeneratedArtifactRecord])


class FileArtifactStore:
    """Stores each user's records as ``<base>/<user_id>.json``."""

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _user_path(self, user_id: str) -> Path:
        safe_id = user_id.replace("/", "_").replace("\\", "_")
        return self._base / f"{safe_id}.json"

    def save(self, user_id: str, records: list[GeneratedArtifactRecord]) -> None:
        path = self._user_path(user_id)
        path.write_bytes(_RECORDS.dump_json(records, indent=2))
        log.debug("Saved %d artifacts for %s to %s", len(records), user_id, path)

    def add(self, user_id: str, record: GeneratedArtifactRecord) -> None:
        self.save(user_id, [*self._load(user_id), record])

    def _load(self, user_id: str) -> list[GeneratedArtifactRecord]:
        path = self._user_path(user_id)
        if not path.is_file():
            return []
        try:
            return _RECORDS.validate_json(path.read_bytes())
        except (OSError, ValidationError) as exc:
            raise ArtifactStoreError(f"Cannot read artifacts for {user_id!r} from {path}: {exc}") from exc

    async def list_artifacts(self, user_id: str) -> list[GeneratedArtifactRecord]:
        records = await asyncio.to_thread(self._load, user_id)
        return sorted(records, key=lambda r: r.produced_at)

    async def list_artifact_ids(self, user_id: str) -> list[str]:
        return [r.id for r in await self.list_artifacts(user_id)]
