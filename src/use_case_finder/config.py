"""
Configuration helpers for the use case search service.

Settings come from the environment. Each value resolves from an explicit
override, then its environment variable, then a default.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Literal

from loguru import logger

from .errors import ConfigurationError


EmbeddingStrategy = Literal["remote", "local"]

DEFAULT_INDEX_NAME = "partner-use-cases"
DEFAULT_REMOTE_MODEL = "gemini-embedding-001"
DEFAULT_LOCAL_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_REMOTE_DIM = 1536
# Neighbours requested per search; fixed, not configurable.
DEFAULT_TOP_K = 10
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_LOG_LEVEL = "INFO"

ENV_INDEX_API_KEY = "PINECONE_API_KEY"
ENV_INDEX_NAME = "PINECONE_INDEX_NAME"
ENV_EMBEDDING_API_KEY = "GOOGLE_API_KEY"
ENV_EMBEDDING_STRATEGY = "USE_CASES_EMBEDDING_STRATEGY"
ENV_EMBEDDING_MODEL = "USE_CASES_EMBEDDING_MODEL"
ENV_EMBEDDING_DIM = "USE_CASES_EMBEDDING_DIM"
ENV_TIMEOUT = "USE_CASES_REQUEST_TIMEOUT"
ENV_LOG_LEVEL = "USE_CASES_LOG_LEVEL"

_STRATEGIES: tuple[str, ...] = ("remote", "local")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration."""

    index_api_key: str | None
    index_name: str
    embedding_strategy: EmbeddingStrategy
    embedding_api_key: str | None
    embedding_model: str
    embedding_dim: int | None
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL


def read_env(name: str) -> str | None:
    """Return a stripped env var, treating blank values as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def resolve_strategy(override: str | None = None) -> EmbeddingStrategy:
    raw = (override or read_env(ENV_EMBEDDING_STRATEGY) or "remote").lower()
    if raw not in _STRATEGIES:
        raise ConfigurationError(
            f"{ENV_EMBEDDING_STRATEGY} must be one of {', '.join(_STRATEGIES)}, got {raw!r}"
        )
    return raw  # type: ignore[return-value]


def load_settings(
    *,
    strategy: str | None = None,
    index_name: str | None = None,
) -> Settings:
    """
    Build ``Settings`` from the environment.

    Precedence for each value:
    1) explicit keyword override
    2) environment variable
    3) default (which may depend on the embedding strategy)
    """
    resolved_strategy = resolve_strategy(strategy)

    default_model = (
        DEFAULT_REMOTE_MODEL if resolved_strategy == "remote" else DEFAULT_LOCAL_MODEL
    )
    raw_dim = read_env(ENV_EMBEDDING_DIM)
    if raw_dim is not None:
        embedding_dim: int | None = _parse_int(ENV_EMBEDDING_DIM, raw_dim)
    elif resolved_strategy == "remote":
        embedding_dim = DEFAULT_REMOTE_DIM
    else:
        # Local models have a fixed native size; only check it when asked to.
        embedding_dim = None

    raw_timeout = read_env(ENV_TIMEOUT)
    timeout = (
        _parse_float(ENV_TIMEOUT, raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    )

    return Settings(
        index_api_key=read_env(ENV_INDEX_API_KEY),
        index_name=index_name or read_env(ENV_INDEX_NAME) or DEFAULT_INDEX_NAME,
        embedding_strategy=resolved_strategy,
        embedding_api_key=read_env(ENV_EMBEDDING_API_KEY),
        embedding_model=read_env(ENV_EMBEDDING_MODEL) or default_model,
        embedding_dim=embedding_dim,
        request_timeout=timeout,
        log_level=(read_env(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Send loguru output to stderr at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}",
    )
