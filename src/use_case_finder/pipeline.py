"""
Embedding-and-similarity-search pipeline.

One call embeds the composed query text, runs a single top-K query against
the vector index and shapes the matches. Nothing is retried and nothing is
returned partially: either the full ranked list comes back or the call
raises.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from .config import DEFAULT_TOP_K, Settings, load_settings
from .embeddings import EmbeddingGenerator, LocalModelCache, create_embedding_generator
from .errors import EmbeddingError, ValidationError
from .models import SearchQuery, UseCaseSearchResponse, parse_search_query
from .search import SimilaritySearchClient, shape_matches


class UseCaseSearchPipeline:
    """Find the use cases closest to a company description."""

    def __init__(
        self,
        embedding_generator: EmbeddingGenerator,
        search_client: SimilaritySearchClient,
        *,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        self.embedding_generator = embedding_generator
        self.search_client = search_client
        self.top_k = min(max(top_k, 1), DEFAULT_TOP_K)

    def search(self, query: SearchQuery | dict[str, Any]) -> UseCaseSearchResponse:
        query = parse_search_query(query)
        if not query.has_description():
            raise ValidationError("description is required")

        query_text = query.to_query_text()

        logger.info("Generating embedding for query...")
        try:
            vector = self.embedding_generator.embed_query(query_text)
        except EmbeddingError as exc:
            if exc.message.startswith("Failed to generate embedding"):
                raise
            raise type(exc)(f"Failed to generate embedding: {exc.message}") from exc

        self.search_client.ensure_configured()

        logger.info("Searching index '{}'...", self.search_client.index_name)
        matches = self.search_client.search(vector, top_k=self.top_k)

        use_cases = shape_matches(matches)
        logger.info("Found {} relevant use cases", len(use_cases))
        return UseCaseSearchResponse(use_cases=use_cases)


def build_pipeline(
    settings: Settings | None = None,
    *,
    model_cache: LocalModelCache | None = None,
) -> UseCaseSearchPipeline:
    """Wire a pipeline from ``settings`` (or the environment)."""
    settings = settings or load_settings()
    embedding_generator = create_embedding_generator(settings, cache=model_cache)
    search_client = SimilaritySearchClient(
        api_key=settings.index_api_key,
        index_name=settings.index_name,
    )
    return UseCaseSearchPipeline(embedding_generator, search_client)
