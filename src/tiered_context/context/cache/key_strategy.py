"""Cache key computation for deterministic, user-scoped keys."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from urllib.parse import quote

KEY_NAMESPACE = "ctx"


def compute_artifact_set_hash(artifact_ids: Iterable[str]) -> str:
    """Stable hash of the *set* of a user's artifact ids.

    Only membership is hashed: editing an artifact's content in place keeps
    the hash, producing a new artifact changes it.
    """
    raw = "\n".join(sorted(set(artifact_ids)))
    return hashlib.sha256(raw.encode()).hexdigest()[:16]


def user_key_prefix(user_id: str) -> str:
    """Prefix shared by every key of *user_id* and no other user."""
    return f"{KEY_NAMESPACE}:{quote(user_id, safe='')}:"


def target_key_prefix(user_id: str, target_id: str) -> str:
    """Prefix shared by every artifact-set variant of one (user, target) key."""
    return f"{user_key_prefix(user_id)}{quote(target_id, safe='')}:"


def compute_cache_key(user_id: str, target_id: str, artifact_set_hash: str) -> str:
    """Key for one (user, target, artifact set) aggregation.

    Components are percent-encoded so a ``:`` inside an id cannot make one
    user's keys match another user's prefix.
    """
    return f"{target_key_prefix(user_id, target_id)}{artifact_set_hash}"
