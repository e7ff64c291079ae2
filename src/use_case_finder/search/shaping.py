"""
Projection of raw index matches into response records.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..models import UseCaseResult
from .index_client import IndexMatch


USE_CASE_FIELDS: tuple[str, ...] = ("title", "partner_name", "url", "text")


def _text_field(metadata: dict[str, Any], name: str) -> str:
    value = metadata.get(name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def to_use_case(match: IndexMatch) -> UseCaseResult:
    """Project one match, defaulting missing text fields to "" and score to 0."""
    metadata = match.metadata or {}
    return UseCaseResult(
        **{name: _text_field(metadata, name) for name in USE_CASE_FIELDS},
        score=match.score if match.score is not None else 0.0,
    )


def shape_matches(matches: Iterable[IndexMatch]) -> list[UseCaseResult]:
    """Project matches in the order given; never re-sorts."""
    return [to_use_case(match) for match in matches]
