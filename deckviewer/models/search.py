"""Search-related Pydantic models."""
from pydantic import BaseModel, ConfigDict, Field


class SearchEntry(BaseModel):
    """Searchable text stored for one slide in the search index."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title of the section containing the slide")
    text: str = Field(..., description="Derived searchable text")


class SearchResult(BaseModel):
    """A slide matching a search query."""

    model_config = ConfigDict(frozen=True)

    slide_id: int = Field(..., ge=1, description="Matching slide number")
    title: str = Field(..., description="Section title of the slide")
    matched_text: str = Field(..., description="Title, or a snippet around the first text match")


class HighlightSegment(BaseModel):
    """A piece of text tagged as plain or matched for presentation."""

    model_config = ConfigDict(frozen=True)

    text: str
    matched: bool = False
