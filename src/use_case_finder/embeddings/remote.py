"""
Hosted embedding generator.

Wraps the Google GenAI embedding API for single-query embedding with a
configurable model and an explicit output dimensionality.
"""

from __future__ import annotations

from typing import Any

from google.genai import Client as GenAIClient
from google.genai.types import HttpOptions
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from ..config import (
    DEFAULT_REMOTE_DIM,
    DEFAULT_REMOTE_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_EMBEDDING_API_KEY,
    read_env,
)
from ..errors import EmbeddingServiceError, MissingCredentialError
from .base import finalize_vector, require_text


class _EmbeddingValues(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    values: list[float]


class RemoteEmbeddingResponse(BaseModel):
    """The part of an ``embed_content`` response this service relies on."""

    model_config = ConfigDict(from_attributes=True)

    embeddings: list[_EmbeddingValues] = Field(min_length=1)


class RemoteEmbeddingGenerator:
    """Generate query embeddings via Google GenAI."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Any | None = None,
    ) -> None:
        self.model = model or DEFAULT_REMOTE_MODEL
        self.dim = dim or DEFAULT_REMOTE_DIM

        if client is not None:
            self._client = client
        else:
            resolved_key = api_key or read_env(ENV_EMBEDDING_API_KEY)
            if not resolved_key:
                raise MissingCredentialError(f"{ENV_EMBEDDING_API_KEY} is not set")
            self._client = GenAIClient(
                api_key=resolved_key,
                http_options=HttpOptions(timeout=int(timeout * 1000)),
            )

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query text for retrieval."""
        require_text(query)
        try:
            result = self._client.models.embed_content(
                model=self.model,
                contents=[query],
                config={
                    "task_type": "RETRIEVAL_QUERY",
                    "output_dimensionality": self.dim,
                },
            )
        except Exception as exc:
            raise EmbeddingServiceError(f"Failed to generate embedding: {exc}") from exc

        try:
            parsed = RemoteEmbeddingResponse.model_validate(result, from_attributes=True)
        except SchemaError as exc:
            raise EmbeddingServiceError(
                f"Failed to generate embedding: unexpected response from {self.model}"
            ) from exc

        return finalize_vector(
            parsed.embeddings[0].values, expected_dim=self.dim, source=self.model
        )
