"""Pydantic models and schemas for type-safe data handling."""

from .slide import Slide, Section, DeckMetadata
from .search import SearchEntry, SearchResult, HighlightSegment
from .outline import OutlineEntry, ViewerState

__all__ = [
    # Deck models
    "Slide",
    "Section",
    "DeckMetadata",
    # Search models
    "SearchEntry",
    "SearchResult",
    "HighlightSegment",
    # Outline models
    "OutlineEntry",
    "ViewerState",
]
