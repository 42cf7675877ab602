from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import HISTORY_CAPACITY


class SearchResult(BaseModel):
    """A single web search hit as returned by the search collaborator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(default="", description="Page title")
    url: str = Field(description="Page URL")
    text: str = Field(default="", description="Body excerpt")
    author: str | None = Field(default=None, description="Author, if known")
    published_date: str | None = Field(
        default=None,
        alias="publishedDate",
        description="Publication date as reported by the provider"
    )

    @field_validator("title", "text", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        # Providers send null for pages without a title or extracted text
        return "" if value is None else value


class SearchRequest(BaseModel):
    """Request body for the search collaborator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str = Field(description="The current user query")
    previous_queries: list[str] = Field(
        default_factory=list,
        alias="previousQueries",
        max_length=HISTORY_CAPACITY,
        description="Up to three earlier queries for conversational context"
    )

    def to_payload(self) -> dict[str, object]:
        """JSON body in the collaborator's wire format."""
        return self.model_dump(by_alias=True)


class SearchResponse(BaseModel):
    """Successful search collaborator response."""

    results: list[SearchResult] = Field(description="Ordered search results")
