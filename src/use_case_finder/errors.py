"""
Error taxonomy for the use case search pipeline.

Every failure surfaced by the pipeline is a ``UseCaseFinderError``. The
HTTP layer only needs ``status_code`` to pick a response; operators can
still tell a missing credential (``ConfigurationError``) apart from a
backend outage (``EmbeddingError`` / ``SearchBackendError``).
"""

from __future__ import annotations


class UseCaseFinderError(Exception):
    """Base class for all pipeline errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(UseCaseFinderError):
    """Caller input is missing or malformed."""

    status_code = 400


class ConfigurationError(UseCaseFinderError):
    """A required setting is absent or invalid."""


class MissingCredentialError(ConfigurationError):
    """An API key needed by an outbound dependency is not configured."""


class EmbeddingDimensionError(ConfigurationError):
    """Embedding length does not match the configured dimensionality."""


class EmbeddingError(UseCaseFinderError):
    """The embedding dependency failed."""


class EmbeddingServiceError(EmbeddingError):
    """The hosted embedding endpoint errored, timed out or returned garbage."""


class EmbeddingModelLoadError(EmbeddingError):
    """The local embedding model could not be loaded."""


class EmbeddingInferenceError(EmbeddingError):
    """The local embedding model failed while encoding text."""


class SearchBackendError(UseCaseFinderError):
    """The vector index was unreachable or rejected the query."""
