"""Vector index access and result shaping."""

from .index_client import IndexMatch, IndexQueryResponse, SimilaritySearchClient
from .shaping import shape_matches, to_use_case

__all__ = [
    "IndexMatch",
    "IndexQueryResponse",
    "SimilaritySearchClient",
    "shape_matches",
    "to_use_case",
]
