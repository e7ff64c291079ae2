from __future__ import annotations

import pytest

from use_case_finder import server as server_module
from use_case_finder.config import (
    ENV_EMBEDDING_API_KEY,
    ENV_EMBEDDING_DIM,
    ENV_EMBEDDING_MODEL,
    ENV_EMBEDDING_STRATEGY,
    ENV_INDEX_API_KEY,
    ENV_INDEX_NAME,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT,
)


_CONFIG_VARS = (
    ENV_EMBEDDING_API_KEY,
    ENV_EMBEDDING_DIM,
    ENV_EMBEDDING_MODEL,
    ENV_EMBEDDING_STRATEGY,
    ENV_INDEX_API_KEY,
    ENV_INDEX_NAME,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT,
    # Not a setting; cleared so a stray value cannot mask a regression.
    "USE_CASES_TOP_K",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real credentials and settings out of unit tests."""
    for name in _CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    server_module.set_pipeline(None)
    yield
    server_module.set_pipeline(None)
