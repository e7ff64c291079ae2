"""
Client for the managed vector index that holds the use cases.
"""

from __future__ import annotations

from typing import Any, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError

from ..config import DEFAULT_INDEX_NAME, ENV_INDEX_API_KEY, ENV_INDEX_NAME, read_env
from ..errors import ConfigurationError, MissingCredentialError, SearchBackendError


class IndexMatch(BaseModel):
    """A single scored record returned by the index."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    score: float | None = None
    metadata: dict[str, Any] | None = None


class IndexQueryResponse(BaseModel):
    """The part of a query response this service relies on."""

    model_config = ConfigDict(from_attributes=True)

    matches: list[IndexMatch]


class SimilaritySearchClient:
    """Top-K nearest-neighbour queries against a named Pinecone index."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        index_name: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.api_key = api_key or read_env(ENV_INDEX_API_KEY)
        self.index_name = index_name or read_env(ENV_INDEX_NAME) or DEFAULT_INDEX_NAME
        self._client = client
        self._index: Any | None = None

    def ensure_configured(self) -> None:
        """Raise if the credential or index name is missing."""
        if self._client is None and not self.api_key:
            raise MissingCredentialError(f"{ENV_INDEX_API_KEY} is not set")
        if not self.index_name:
            raise ConfigurationError(f"{ENV_INDEX_NAME} is not set")

    def _get_index(self) -> Any:
        if self._index is not None:
            return self._index
        self.ensure_configured()
        try:
            if self._client is None:
                from pinecone import Pinecone

                self._client = Pinecone(api_key=self.api_key)
            self._index = self._client.Index(self.index_name)
        except Exception as exc:
            raise SearchBackendError(
                f"Failed to open index '{self.index_name}': {exc}"
            ) from exc
        return self._index

    def search(self, vector: Sequence[float], top_k: int) -> list[IndexMatch]:
        """
        Return up to ``top_k`` matches for ``vector``.

        Matches keep the order the index returned them in; ranking and
        tie-breaking belong to the index.
        """
        if top_k < 1:
            raise ConfigurationError(f"top_k must be positive, got {top_k}")
        index = self._get_index()
        try:
            raw = index.query(
                vector=list(vector),
                top_k=top_k,
                include_metadata=True,
            )
        except Exception as exc:
            raise SearchBackendError(
                f"Failed to query index '{self.index_name}': {exc}"
            ) from exc

        try:
            parsed = IndexQueryResponse.model_validate(raw, from_attributes=True)
        except SchemaError as exc:
            raise SearchBackendError(
                f"Unexpected response from index '{self.index_name}'"
            ) from exc

        if len(parsed.matches) > top_k:
            logger.warning(
                "Index returned {} matches for top_k={}, truncating",
                len(parsed.matches),
                top_k,
            )
        return parsed.matches[:top_k]
