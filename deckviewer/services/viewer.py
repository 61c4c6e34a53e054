"""
Viewer session service.

Holds the single viewing session: the loaded deck, its outline and collapse
state, the search index and the current slide. The host pushes navigation
into it and reads outline, state and search results back.
"""
import logging
from typing import Awaitable, Callable, Optional

from deckviewer.core import get_settings
from deckviewer.models.outline import OutlineEntry, ViewerState
from deckviewer.models.search import HighlightSegment, SearchResult
from deckviewer.models.slide import DeckMetadata, Section, Slide
from deckviewer.outline import CollapseTracker, OutlineModel, OutlineNode
from deckviewer.services.metadata import load_deck
from deckviewer.services.search import (
    SearchBatch,
    SearchDebouncer,
    SearchIndex,
    build_search_index,
    highlight,
    search,
)

logger = logging.getLogger(__name__)


class ViewerService:
    """
    Single-session presentation viewer.

    Not thread-safe; intended to be used from the event loop only.
    """

    def __init__(self, deck: Optional[DeckMetadata] = None):
        """
        Initialize the viewer.

        Args:
            deck: Deck to view; loaded from the configured source when omitted
        """
        self._settings = get_settings()
        if deck is None:
            deck = load_deck(
                self._settings.metadata_source,
                fallback_total=self._settings.fallback_total_slides,
                timeout=self._settings.metadata_timeout,
            )
        self.load(deck)

    def load(self, deck: DeckMetadata) -> None:
        """Replace the deck and rebuild outline, collapse state and search index."""
        self.deck = deck
        self.outline = OutlineModel(deck.sections, deck.total_slides)
        self.collapse = CollapseTracker(self.outline, level=self._settings.collapsed_level)
        self.index: SearchIndex = build_search_index(deck.slides, self.outline)
        self.current_slide = 1
        self.collapse.ensure_expanded_for_slide(self.current_slide)

    @property
    def total_slides(self) -> int:
        return self.deck.total_slides

    @property
    def current_section(self) -> Optional[Section]:
        return self.outline.section_containing(self.current_slide)

    def get_slide(self, slide_id: int) -> Optional[Slide]:
        return self.deck.get_slide(slide_id)

    # Navigation

    def go_to(self, slide_number: int) -> ViewerState:
        """
        Navigate to a slide, clamped to the deck bounds.

        Expands the enclosing collapsed section so the current entry is visible.
        """
        clamped = min(max(slide_number, 1), max(self.total_slides, 1))
        if clamped != slide_number:
            logger.debug(f"Clamped slide {slide_number} to {clamped}")
        self.current_slide = clamped
        self.collapse.ensure_expanded_for_slide(clamped)
        return self.state()

    def next(self) -> ViewerState:
        return self.go_to(self.current_slide + 1)

    def previous(self) -> ViewerState:
        return self.go_to(self.current_slide - 1)

    def state(self) -> ViewerState:
        """Get the current navigation state."""
        total = self.total_slides
        index = self.outline.index_containing(self.current_slide)
        section = self.current_section
        progress = 0.0
        if total > 1:
            progress = (self.current_slide - 1) / (total - 1) * 100

        return ViewerState(
            current_slide=self.current_slide,
            total_slides=total,
            current_section=section.title if section else None,
            current_section_key=self.outline.key_of(index) if index is not None else None,
            has_previous=self.current_slide > 1,
            has_next=self.current_slide < total,
            progress=progress,
        )

    # Outline

    def toggle(self, key: str) -> Optional[bool]:
        """
        Toggle a section's collapsed state.

        Returns:
            New collapsed state, or None if the key is unknown
        """
        if self.outline.index_of_key(key) is None:
            return None
        return self.collapse.toggle_key(key)

    def outline_tree(self) -> list[OutlineEntry]:
        """Render the navigation tree for the current slide."""
        current_index = self.outline.index_containing(self.current_slide)
        return [self._render(node, current_index) for node in self.outline.roots]

    def _render(self, node: OutlineNode, current_index: Optional[int]) -> OutlineEntry:
        return OutlineEntry(
            key=node.key,
            title=node.section.title,
            level=node.level,
            start_slide=node.start_slide,
            end_slide=node.end_slide,
            has_children=bool(node.children),
            collapsed=self.collapse.is_key_collapsed(node.key),
            active=node.index == current_index,
            in_section=node.contains(self.current_slide),
            children=[self._render(child, current_index) for child in node.children],
        )

    # Search

    def search(self, query: str) -> list[SearchResult]:
        return search(
            self.index,
            query,
            limit=self._settings.search_results_limit,
            min_length=self._settings.search_min_query_length,
            before=self._settings.search_snippet_before,
            after=self._settings.search_snippet_after,
        )

    def highlight(self, text: str, query: str) -> list[HighlightSegment]:
        return highlight(text, query, min_length=self._settings.search_min_query_length)

    def create_debouncer(
        self,
        on_results: Callable[[SearchBatch], Awaitable[None]],
    ) -> SearchDebouncer:
        """Create a live-search debouncer bound to this session's index."""
        return SearchDebouncer(
            self.search,
            on_results=on_results,
            delay=self._settings.search_debounce_seconds,
        )


_viewer_service: Optional[ViewerService] = None


def get_viewer_service() -> ViewerService:
    """Get the singleton viewer service instance."""
    global _viewer_service
    if _viewer_service is None:
        _viewer_service = ViewerService()
    return _viewer_service


def reset_viewer_service() -> None:
    """Drop the singleton so the next call reloads the deck."""
    global _viewer_service
    _viewer_service = None
