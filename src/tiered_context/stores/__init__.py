"""Pluggable artifact stores: where a user's produced artifacts are read from."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiered_context.stores.file_store import FileArtifactStore
from tiered_context.stores.memory_store import MemoryArtifactStore
from tiered_context.stores.models import GeneratedArtifactRecord
from tiered_context.stores.protocols import IArtifactStore

if TYPE_CHECKING:
    from tiered_context.core.config import ArtifactStoreConfig

__all__ = [
    "FileArtifactStore",
    "GeneratedArtifactRecord",
    "IArtifactStore",
    "MemoryArtifactStore",
    "create_artifact_store",
]


def create_artifact_store(settings: object | None = None) -> IArtifactStore:
    """Create an artifact store from settings.

    Args:
        settings: An ``AppSettings`` or ``ArtifactStoreConfig`` instance.
            If None, returns an empty MemoryArtifactStore.
    """
    config: ArtifactStoreConfig | None = None

    if settings is not None:
        config = getattr(settings, "artifacts", None)
        if config is None and hasattr(settings, "store_path"):
            config = settings  # type: ignore[assignment]

    if config is None or config.backend == "memory":
        return MemoryArtifactStore()
    elif config.backend == "file":
        return FileArtifactStore(config.store_path)
    else:
        raise ValueError(f"Unknown artifact store backend: {config.backend!r}")
