"""Tests for the embed-then-search pipeline."""

from __future__ import annotations

import pytest

from tests.fakes import (
    FakeEmbeddingGenerator,
    FakeIndex,
    failing_embedding,
    make_pipeline,
    match,
)
from use_case_finder.config import load_settings
from use_case_finder.embeddings import LocalEmbeddingGenerator, LocalModelCache
from use_case_finder.errors import (
    EmbeddingDimensionError,
    EmbeddingModelLoadError,
    EmbeddingServiceError,
    MissingCredentialError,
    SearchBackendError,
    ValidationError,
)
from use_case_finder.models import SearchQuery
from use_case_finder.pipeline import UseCaseSearchPipeline, build_pipeline
from use_case_finder.search import SimilaritySearchClient


def test_end_to_end_example() -> None:
    index = FakeIndex(
        {
            "matches": [
                {
                    "id": "case-a",
                    "metadata": {
                        "title": "Case A",
                        "partner_name": "PartnerX",
                        "url": "http://x",
                        "text": "...",
                    },
                    "score": 0.87,
                }
            ]
        }
    )
    pipeline, embedding, index = make_pipeline(
        embedding=FakeEmbeddingGenerator([0.1, 0.2, 0.3]), index=index
    )

    response = pipeline.search(
        {"companyName": "Acme", "description": "cloud cost optimization"}
    )

    assert embedding.calls == ["Company: Acme. Description: cloud cost optimization"]
    assert index.calls[0]["vector"] == [0.1, 0.2, 0.3]
    assert response.to_payload() == {
        "useCases": [
            {
                "title": "Case A",
                "partner_name": "PartnerX",
                "url": "http://x",
                "text": "...",
                "score": 0.87,
            }
        ],
        "count": 1,
    }


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"companyName": "Acme"},
        {"description": ""},
        {"companyName": "Acme", "description": "   "},
        {"description": None},
    ],
)
def test_missing_description_makes_no_calls(payload) -> None:
    pipeline, embedding, index = make_pipeline()

    with pytest.raises(ValidationError, match="description is required"):
        pipeline.search(payload)

    assert embedding.calls == []
    assert index.calls == []


def test_requests_at_most_ten_results() -> None:
    index = FakeIndex({"matches": [match(f"c{i}", 0.9) for i in range(4)]})
    pipeline, _, index = make_pipeline(index=index)

    response = pipeline.search(SearchQuery(description="supply chain visibility"))

    assert index.calls[0]["top_k"] == 10
    assert response.count == len(response.use_cases) == 4


def test_top_k_never_exceeds_ten() -> None:
    pipeline = UseCaseSearchPipeline(
        FakeEmbeddingGenerator(),
        SimilaritySearchClient(api_key="k", index_name="i"),
        top_k=25,
    )
    assert pipeline.top_k == 10


def test_results_keep_backend_order() -> None:
    index = FakeIndex(
        {"matches": [match("a", 0.9), match("b", 0.7), match("c", 0.5)]}
    )
    pipeline, _, _ = make_pipeline(index=index)

    response = pipeline.search(SearchQuery(description="fleet telematics"))

    assert [u.score for u in response.use_cases] == [0.9, 0.7, 0.5]


def test_defaults_applied_to_sparse_matches() -> None:
    index = FakeIndex({"matches": [{"id": "x", "metadata": {"url": "http://x"}}]})
    pipeline, _, _ = make_pipeline(index=index)

    use_case = pipeline.search(SearchQuery(description="edge AI")).use_cases[0]

    assert use_case.title == ""
    assert use_case.score == 0
    assert use_case.url == "http://x"


def test_identical_queries_give_identical_results() -> None:
    index = FakeIndex({"matches": [match("a", 0.8), match("b", 0.6)]})
    pipeline, _, _ = make_pipeline(index=index)
    query = SearchQuery(company_name="Acme", description="cloud cost optimization")

    first = pipeline.search(query)
    second = pipeline.search(query)

    assert first.to_payload() == second.to_payload()


def test_embedding_failure_aborts_before_search() -> None:
    pipeline, _, index = make_pipeline(embedding=failing_embedding("quota exceeded"))

    with pytest.raises(EmbeddingServiceError, match="Failed to generate embedding: quota exceeded"):
        pipeline.search(SearchQuery(description="payments"))

    assert index.calls == []


def test_model_load_failure_propagates_with_message() -> None:
    def broken_loader(name: str):
        raise OSError("disk full")

    embedding = LocalEmbeddingGenerator(model="m", cache=LocalModelCache(broken_loader))
    pipeline, _, index = make_pipeline(embedding=embedding)

    with pytest.raises(EmbeddingModelLoadError, match="disk full"):
        pipeline.search(SearchQuery(description="payments"))
    assert index.calls == []


def test_dimension_mismatch_surfaces_as_configuration_error() -> None:
    embedding = FakeEmbeddingGenerator(error=EmbeddingDimensionError("got 384, expected 1536"))
    pipeline, _, index = make_pipeline(embedding=embedding)

    with pytest.raises(EmbeddingDimensionError):
        pipeline.search(SearchQuery(description="payments"))
    assert index.calls == []


def test_missing_index_credential_is_configuration_error(monkeypatch) -> None:
    monkeypatch.delenv("PINECONE_API_KEY", raising=False)
    embedding = FakeEmbeddingGenerator()
    pipeline = UseCaseSearchPipeline(
        embedding, SimilaritySearchClient(api_key=None, index_name="partner-use-cases")
    )

    with pytest.raises(MissingCredentialError, match="PINECONE_API_KEY is not set"):
        pipeline.search(SearchQuery(description="payments"))


def test_search_failure_propagates() -> None:
    index = FakeIndex(error=ConnectionError("connection reset"))
    pipeline, _, _ = make_pipeline(index=index)

    with pytest.raises(SearchBackendError, match="connection reset"):
        pipeline.search(SearchQuery(description="payments"))


def test_build_pipeline_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("PINECONE_API_KEY", "pc-key")
    monkeypatch.setenv("PINECONE_INDEX_NAME", "custom-index")
    cache = LocalModelCache(lambda name: None)

    pipeline = build_pipeline(load_settings(strategy="local"), model_cache=cache)

    assert isinstance(pipeline.embedding_generator, LocalEmbeddingGenerator)
    assert pipeline.search_client.index_name == "custom-index"
    assert pipeline.search_client.api_key == "pc-key"
    assert pipeline.top_k == 10


def test_build_pipeline_without_embedding_key_fails() -> None:
    with pytest.raises(MissingCredentialError, match="GOOGLE_API_KEY"):
        build_pipeline(load_settings(strategy="remote"))
