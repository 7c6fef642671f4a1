"""Nested pydantic-settings configuration for the application.

Each group reads its own ``TIERCTX_<GROUP>_*`` env vars, e.g.::

    export TIERCTX_CONTEXT_CACHE_BACKEND=redis
    export TIERCTX_TOKENIZER_METHOD=tiktoken
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class AggregationConfig(BaseSettings):
    """Tier budgets and summarization knobs.

    Env vars use ``TIERCTX_AGGREGATION_`` prefix.
    """

    model_config = {"env_prefix": "TIERCTX_AGGREGATION_"}

    default_tier1_budget: int = Field(default=500, ge=0)
    default_tier2_budget: int = Field(default=2000, ge=0)
    default_tier3_budget: int = Field(default=1000, ge=0)
    max_recommended_total: int = 4000
    summarizer: Literal["heuristic", "passthrough"] = "heuristic"
    summary_target_tokens: int = Field(default=200, gt=0)
    summary_max_fields: int = Field(default=5, gt=0)
    summary_max_string_chars: int = Field(default=100, gt=0)
    cost_per_million_tokens: float = 3.0


class TokenizerConfig(BaseSettings):
    """Size estimator configuration.

    Env vars use ``TIERCTX_TOKENIZER_`` prefix.
    """

    model_config = {"env_prefix": "TIERCTX_TOKENIZER_"}

    method: Literal["approximate", "tiktoken"] = "approximate"
    model: str = "gpt-4o"
    chars_per_token: int = Field(default=4, gt=0)
    fallback_encoding: str = "cl100k_base"


class ContextCacheConfig(BaseSettings):
    """Aggregated-context cache configuration.

    Env vars use ``TIERCTX_CONTEXT_CACHE_`` prefix::

        export TIERCTX_CONTEXT_CACHE_BACKEND=redis
        export TIERCTX_CONTEXT_CACHE_REDIS_URL=redis://cache:6379/0
    """

    model_config = {"env_prefix": "TIERCTX_CONTEXT_CACHE_"}

    enabled: bool = True
    backend: Literal["memory", "redis"] = "memory"
    max_entries: int = Field(default=1000, gt=0)
    ttl_seconds: int = Field(default=24 * 60 * 60, ge=0)
    redis_url: str = ""
    key_prefix: str = "tierctx:cache:"


class ArtifactStoreConfig(BaseSettings):
    """Artifact store configuration.

    Env vars use ``TIERCTX_ARTIFACTS_`` prefix.
    """

    model_config = {"env_prefix": "TIERCTX_ARTIFACTS_"}

    backend: Literal["memory", "file"] = "memory"
    store_path: Path = Path("./artifacts")


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``TIERCTX_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "TIERCTX_OBSERVABILITY_"}

    service_name: str = "tiered-context"
    log_level: str = "INFO"
    json_logs: bool | None = None


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    aggregation: AggregationConfig = AggregationConfig()
    tokenizer: TokenizerConfig = TokenizerConfig()
    context_cache: ContextCacheConfig = ContextCacheConfig()
    artifacts: ArtifactStoreConfig = ArtifactStoreConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
