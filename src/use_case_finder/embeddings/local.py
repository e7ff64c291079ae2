"""
In-process embedding generator backed by sentence-transformers.

The model is loaded once per process on first use and shared, read-only,
by every request after that.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future
from typing import Any, Callable

import numpy as np
from loguru import logger

from ..config import DEFAULT_LOCAL_MODEL
from ..errors import (
    EmbeddingError,
    EmbeddingInferenceError,
    EmbeddingModelLoadError,
)
from .base import finalize_vector, require_text


ModelLoader = Callable[[str], Any]


def load_sentence_transformer(model_name: str) -> Any:
    from sentence_transformers import SentenceTransformer

    return SentenceTransformer(model_name)


class LocalModelCache:
    """
    Process-wide cache of loaded models with an initialize-once guarantee.

    The first caller for a model publishes an in-flight ``Future`` and runs
    the load; concurrent callers wait on that same future instead of
    starting their own load. A failed load is dropped from the cache so the
    next call can try again.
    """

    def __init__(self, loader: ModelLoader = load_sentence_transformer) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._models: dict[str, Future[Any]] = {}

    def get(self, model_name: str) -> Any:
        with self._lock:
            future = self._models.get(model_name)
            is_owner = future is None
            if future is None:
                future = Future()
                self._models[model_name] = future

        if not is_owner:
            return future.result()

        logger.info("Loading local embedding model '{}'...", model_name)
        started = time.perf_counter()
        try:
            model = self._loader(model_name)
        except BaseException as exc:
            # Waiters must always be released, even on KeyboardInterrupt.
            with self._lock:
                self._models.pop(model_name, None)
            if not isinstance(exc, Exception):
                future.set_exception(
                    EmbeddingModelLoadError(
                        f"Loading embedding model '{model_name}' was interrupted"
                    )
                )
                raise
            error = EmbeddingModelLoadError(
                f"Failed to load embedding model '{model_name}': {exc}"
            )
            error.__cause__ = exc
            future.set_exception(error)
            raise error
        future.set_result(model)
        logger.info(
            "Loaded local embedding model '{}' in {:.2f}s",
            model_name,
            time.perf_counter() - started,
        )
        return model

    def is_loaded(self, model_name: str) -> bool:
        with self._lock:
            future = self._models.get(model_name)
        return future is not None and future.done() and future.exception() is None


_default_cache = LocalModelCache()


def get_default_model_cache() -> LocalModelCache:
    return _default_cache


def mean_pool_and_normalize(raw: Any) -> np.ndarray:
    """
    Reduce model output to a single unit-norm vector.

    Accepts per-token embeddings (tokens x dim), which are mean-pooled, or
    an already pooled 1-D vector.
    """
    if hasattr(raw, "cpu"):
        raw = raw.cpu()
    array = np.asarray(raw, dtype=np.float64)
    if array.ndim == 2:
        if array.shape[0] == 0:
            raise EmbeddingInferenceError("Model produced no token embeddings")
        array = array.mean(axis=0)
    elif array.ndim != 1:
        raise EmbeddingInferenceError(
            f"Unexpected model output shape {array.shape}"
        )

    norm = float(np.linalg.norm(array))
    if not np.isfinite(norm) or norm == 0.0:
        raise EmbeddingInferenceError("Model produced a zero or non-finite embedding")
    return array / norm


class LocalEmbeddingGenerator:
    """Generate query embeddings with a locally loaded model."""

    def __init__(
        self,
        *,
        model: str | None = None,
        dim: int | None = None,
        cache: LocalModelCache | None = None,
    ) -> None:
        self.model = model or DEFAULT_LOCAL_MODEL
        self.dim = dim
        self._cache = cache or get_default_model_cache()

    def embed_query(self, query: str) -> list[float]:
        """Embed a single query text for retrieval."""
        require_text(query)
        model = self._cache.get(self.model)
        try:
            raw = model.encode(
                query, output_value="token_embeddings", convert_to_numpy=False
            )
            pooled = mean_pool_and_normalize(raw)
        except EmbeddingError:
            raise
        except Exception as exc:
            raise EmbeddingInferenceError(
                f"Failed to generate embedding: {exc}"
            ) from exc
        return finalize_vector(pooled, expected_dim=self.dim, source=self.model)
