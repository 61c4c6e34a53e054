"""Slide and section Pydantic models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Slide(BaseModel):
    """A single slide image set, addressed by its 1-based position."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., ge=1, description="Slide number (identifier and position)")
    thumbnail: str = Field(..., description="Thumbnail image URI")
    full: str = Field(..., description="Full-size image URI")
    high_res: str = Field(..., alias="highRes", description="High-resolution image URI")


class Section(BaseModel):
    """A named outline entry starting at a slide, nested by level."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., description="Section title")
    start_slide: int = Field(..., ge=1, alias="startSlide", description="First slide of the section")
    level: int = Field(default=0, ge=0, description="Nesting depth (0 = top level)")

    @property
    def key(self) -> str:
        """Identifier built from start slide, level and title, independent of list position."""
        return f"{self.start_slide}:{self.level}:{self.title}"


class DeckMetadata(BaseModel):
    """
    The metadata document describing a deck.

    Mirrors ``metadata.json``: ``{"totalPages", "slides", "sections"}``.
    Slides must be numbered 1..N in order and sections must be sorted by
    start slide; the outline and the search index rely on both.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_pages: Optional[int] = Field(default=None, ge=0, alias="totalPages")
    slides: list[Slide] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_ordering(self) -> "DeckMetadata":
        for position, slide in enumerate(self.slides, start=1):
            if slide.id != position:
                raise ValueError(f"slide ids must be contiguous from 1, got {slide.id} at position {position}")

        previous = 0
        for section in self.sections:
            if section.start_slide < previous:
                raise ValueError(
                    f"sections must be sorted by startSlide: "
                    f"'{section.title}' starts at {section.start_slide} after {previous}"
                )
            previous = section.start_slide

        if self.total_pages is None:
            self.total_pages = len(self.slides)
        return self

    @property
    def total_slides(self) -> int:
        """Number of slides in the deck."""
        return len(self.slides)

    def get_slide(self, slide_id: int) -> Optional[Slide]:
        """Get a slide by id, or None when out of range."""
        if 1 <= slide_id <= len(self.slides):
            return self.slides[slide_id - 1]
        return None

    def to_document(self) -> dict:
        """Convert to the camelCase JSON document layout."""
        return self.model_dump(by_alias=True)
