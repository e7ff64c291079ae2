"""
Use Case Finder - semantic search over partner use cases.

This package embeds a short company description, queries a managed vector
index for the nearest use case documents and returns them ranked by
similarity. Embeddings come either from Google GenAI or from a local
sentence-transformers model, chosen by configuration.

Example usage:
    >>> from use_case_finder import build_pipeline, SearchQuery
    >>> pipeline = build_pipeline()
    >>> result = pipeline.search(
    ...     SearchQuery(company_name="Acme", description="cloud cost optimization")
    ... )
    >>> [use_case.title for use_case in result.use_cases]
"""

from .config import Settings, load_settings
from .errors import (
    UseCaseFinderError,
    ValidationError,
    ConfigurationError,
    MissingCredentialError,
    EmbeddingDimensionError,
    EmbeddingError,
    EmbeddingServiceError,
    EmbeddingModelLoadError,
    EmbeddingInferenceError,
    SearchBackendError,
)
from .embeddings import (
    EmbeddingGenerator,
    LocalEmbeddingGenerator,
    LocalModelCache,
    RemoteEmbeddingGenerator,
    create_embedding_generator,
)
from .models import SearchQuery, UseCaseResult, UseCaseSearchResponse, compose_query_text
from .pipeline import UseCaseSearchPipeline, build_pipeline
from .search import IndexMatch, SimilaritySearchClient

__all__ = [
    # Configuration
    "Settings",
    "load_settings",
    # Errors
    "UseCaseFinderError",
    "ValidationError",
    "ConfigurationError",
    "MissingCredentialError",
    "EmbeddingDimensionError",
    "EmbeddingError",
    "EmbeddingServiceError",
    "EmbeddingModelLoadError",
    "EmbeddingInferenceError",
    "SearchBackendError",
    # Embeddings
    "EmbeddingGenerator",
    "LocalEmbeddingGenerator",
    "LocalModelCache",
    "RemoteEmbeddingGenerator",
    "create_embedding_generator",
    # Models
    "SearchQuery",
    "UseCaseResult",
    "UseCaseSearchResponse",
    "compose_query_text",
    # Pipeline
    "UseCaseSearchPipeline",
    "build_pipeline",
    # Search
    "IndexMatch",
    "SimilaritySearchClient",
]
