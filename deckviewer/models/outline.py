"""Outline and viewer state response models."""
from typing import Optional

from pydantic import BaseModel, Field


class OutlineEntry(BaseModel):
    """One node of the navigation tree as rendered for the current slide."""

    key: str = Field(..., description="Stable section key")
    title: str
    level: int
    start_slide: int
    end_slide: int
    has_children: bool = False
    collapsed: bool = False
    active: bool = Field(default=False, description="Section is the current section")
    in_section: bool = Field(default=False, description="Current slide lies within the section range")
    children: list["OutlineEntry"] = Field(default_factory=list)


class ViewerState(BaseModel):
    """Navigation state of the viewer session."""

    current_slide: int
    total_slides: int
    current_section: Optional[str] = None
    current_section_key: Optional[str] = None
    has_previous: bool = False
    has_next: bool = False
    progress: float = Field(default=0.0, ge=0, le=100, description="Progress through the deck in percent")
