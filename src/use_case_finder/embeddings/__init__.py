"""Embedding generators for query text."""

from ..config import Settings
from .base import EmbeddingGenerator
from .local import (
    LocalEmbeddingGenerator,
    LocalModelCache,
    get_default_model_cache,
    mean_pool_and_normalize,
)
from .remote import RemoteEmbeddingGenerator, RemoteEmbeddingResponse


def create_embedding_generator(
    settings: Settings, *, cache: LocalModelCache | None = None
) -> EmbeddingGenerator:
    """Build the generator selected by ``settings.embedding_strategy``."""
    if settings.embedding_strategy == "local":
        return LocalEmbeddingGenerator(
            model=settings.embedding_model,
            dim=settings.embedding_dim,
            cache=cache,
        )
    return RemoteEmbeddingGenerator(
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        dim=settings.embedding_dim,
        timeout=settings.request_timeout,
    )


__all__ = [
    "EmbeddingGenerator",
    "LocalEmbeddingGenerator",
    "LocalModelCache",
    "RemoteEmbeddingGenerator",
    "RemoteEmbeddingResponse",
    "create_embedding_generator",
    "get_default_model_cache",
    "mean_pool_and_normalize",
]
