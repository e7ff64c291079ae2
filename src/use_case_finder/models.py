from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic import ValidationError as SchemaError
from typing import Any

from .errors import ValidationError


class SearchQuery(BaseModel):
    """Company description submitted by the user"""

    model_config = ConfigDict(populate_by_name=True)

    company_name: str | None = Field(
        default=None, alias="companyName", description="Optional company name"
    )
    description: str | None = Field(
        default=None, description="Free-text description of the company"
    )

    def has_description(self) -> bool:
        return bool(self.description and self.description.strip())

    def to_query_text(self) -> str:
        return compose_query_text(self.description or "", self.company_name)


def parse_search_query(payload: Any) -> SearchQuery:
    """Validate a request payload, reporting problems as ``ValidationError``."""
    if isinstance(payload, SearchQuery):
        return payload
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return SearchQuery.model_validate(payload)
    except SchemaError as exc:
        fields = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        if "description" in fields:
            raise ValidationError("description is required") from exc
        raise ValidationError(f"Invalid search query: {', '.join(sorted(fields))}") from exc


def compose_query_text(description: str, company_name: str | None = None) -> str:
    """Build the text that gets embedded for a search."""
    if company_name and company_name.strip():
        return f"Company: {company_name}. Description: {description}"
    return f"Description: {description}"


class UseCaseResult(BaseModel):
    """A matched use case, as returned to the caller"""

    title: str = Field(default="", description="Use case title")
    partner_name: str = Field(default="", description="Partner that delivered it")
    url: str = Field(default="", description="Link to the full use case")
    text: str = Field(default="", description="Use case body text")
    score: float = Field(default=0.0, description="Similarity score from the index")

    @property
    def match_percent(self) -> str:
        return f"{self.score * 100:.1f}%"


class UseCaseSearchResponse(BaseModel):
    """Ranked use cases for one search"""

    model_config = ConfigDict(populate_by_name=True)

    use_cases: list[UseCaseResult] = Field(
        default_factory=list, alias="useCases"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        return len(self.use_cases)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
