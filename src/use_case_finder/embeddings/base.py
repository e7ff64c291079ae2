"""
Shared contract and checks for embedding generators.
"""

from __future__ import annotations

import math
from typing import Protocol, Sequence

from ..errors import EmbeddingDimensionError, EmbeddingError, ValidationError


class EmbeddingGenerator(Protocol):
    """Turns query text into a fixed-length vector."""

    model: str
    dim: int | None

    def embed_query(self, text: str) -> list[float]:
        """Embed a single query text for retrieval."""


def require_text(text: str) -> None:
    if not text or not text.strip():
        raise ValidationError("Cannot embed empty text")


def finalize_vector(
    values: Sequence[float], *, expected_dim: int | None, source: str
) -> list[float]:
    """Convert to a plain float list and check length and finiteness."""
    vector = [float(v) for v in values]
    if expected_dim is not None and len(vector) != expected_dim:
        raise EmbeddingDimensionError(
            f"{source} returned a {len(vector)}-dimensional embedding, "
            f"expected {expected_dim}"
        )
    if not all(math.isfinite(v) for v in vector):
        raise EmbeddingError(f"{source} returned a non-finite embedding value")
    return vector
