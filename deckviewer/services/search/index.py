"""
Search index over slide titles.

Each slide is indexed under the title of the section that contains it,
with a derived text of the form ``"Slide {id} {title}"``.
"""
import logging
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence

from deckviewer.models.search import SearchEntry
from deckviewer.models.slide import Slide
from deckviewer.outline.tree import OutlineModel

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class SearchIndex:
    """Immutable mapping of slide id to searchable entry, iterated in slide order."""

    def __init__(self, entries: Mapping[int, SearchEntry]):
        self._entries = MappingProxyType(dict(sorted(entries.items())))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __contains__(self, slide_id: object) -> bool:
        return slide_id in self._entries

    def get(self, slide_id: int) -> Optional[SearchEntry]:
        return self._entries.get(slide_id)

    def items(self):
        return self._entries.items()

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Convert to a JSON-serializable dictionary keyed by slide id."""
        return {str(slide_id): entry.model_dump() for slide_id, entry in self._entries.items()}


def build_search_index(slides: Sequence[Slide], outline: OutlineModel) -> SearchIndex:
    """
    Build the search index for a deck.

    Args:
        slides: Deck slides
        outline: Outline model built from the deck's sections

    Returns:
        SearchIndex keyed by slide id
    """
    entries: dict[int, SearchEntry] = {}
    for slide in slides:
        section = outline.section_containing(slide.id)
        title = section.title if section else UNTITLED
        entries[slide.id] = SearchEntry(title=title, text=f"Slide {slide.id} {title}")

    logger.info(f"Built search index with {len(entries)} slides")
    return SearchIndex(entries)
