"""Pluggable size estimators.

Modes:
  - ``approximate``: ``ceil(chars / 4)`` (no dependencies, fast)
  - ``tiktoken``: OpenAI tiktoken (requires ``tiktoken`` extra)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from tiered_context.context.protocols import ISizeEstimator
from tiered_context.exceptions import TokenizerError

if TYPE_CHECKING:
    from tiered_context.core.config import TokenizerConfig

log = logging.getLogger(__name__)

# Cache for tiktoken encoders
_tiktoken_cache: dict[str, Any] = {}


class ApproximateSizeEstimator:
    """Character-count heuristic: one token per ``chars_per_token`` characters."""

    method = "approximate"

    def __init__(self, chars_per_token: int = 4) -> None:
        if chars_per_token <= 0:
            raise TokenizerError(f"chars_per_token must be positive, got {chars_per_token}")
        self._chars_per_token = chars_per_token

    def estimate(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / self._chars_per_token)


class TiktokenSizeEstimator:
    """Exact token counts from an OpenAI ``tiktoken`` encoding."""

    method = "tiktoken"

    def __init__(self, model: str = "gpt-4o", fallback_encoding: str = "cl100k_base") -> None:
        try:
            import tiktoken
        except ImportError as e:
            raise TokenizerError(
                "tiktoken not installed. Install with: pip install tiered-context[tiktoken]"
            ) from e

        cache_key = f"{model}:{fallback_encoding}"
        if cache_key not in _tiktoken_cache:
            try:
                _tiktoken_cache[cache_key] = tiktoken.encoding_for_model(model)
            except KeyError:
                log.debug("No tiktoken encoding for %s, using %s", model, fallback_encoding)
                _tiktoken_cache[cache_key] = tiktoken.get_encoding(fallback_encoding)
        self._encoding = _tiktoken_cache[cache_key]

    def estimate(self, text: str) -> int:
        if not text:
            return 0
        return len(self._encoding.encode(text))


def create_size_estimator(settings: object | None = None) -> ISizeEstimator:
    """Create a size estimator from settings.

    Args:
        settings: An ``AppSettings`` or ``TokenizerConfig`` instance.
            If None, returns ApproximateSizeEstimator with defaults.
    """
    config: TokenizerConfig | None = None

    if settings is not None:
        config = getattr(settings, "tokenizer", None)
        if config is None and hasattr(settings, "chars_per_token"):
            config = settings  # type: ignore[assignment]

    if config is None:
        return ApproximateSizeEstimator()

    if config.method == "approximate":
        return ApproximateSizeEstimator(chars_per_token=config.chars_per_token)
    elif config.method == "tiktoken":
        return TiktokenSizeEstimator(model=config.model, fallback_encoding=config.fallback_encoding)
    else:
        raise ValueError(f"Unknown tokenizer method: {config.method!r}")
