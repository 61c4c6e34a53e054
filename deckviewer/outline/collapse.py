"""Collapse state of the outline, keyed by stable section keys."""
import logging
from typing import Optional

from deckviewer.outline.tree import OutlineModel

logger = logging.getLogger(__name__)

# Second tier of nesting starts collapsed; top-level and deep entries stay open
DEFAULT_COLLAPSED_LEVEL = 1


def initial_state(outline: OutlineModel, level: int = DEFAULT_COLLAPSED_LEVEL) -> set[str]:
    """Get the keys of the sections collapsed by default."""
    return {node.key for node in outline.nodes if node.level == level}


class CollapseTracker:
    """
    Tracks which outline sections the user has collapsed.

    Navigation only ever expands: ``ensure_expanded_for_slide`` opens the
    enclosing section when needed and never closes anything.
    """

    def __init__(self, outline: OutlineModel, level: int = DEFAULT_COLLAPSED_LEVEL):
        self._outline = outline
        self._level = level
        self._collapsed = initial_state(outline, level)

    @property
    def collapsed_keys(self) -> frozenset[str]:
        return frozenset(self._collapsed)

    def is_collapsed(self, section_index: int) -> bool:
        key = self._outline.key_of(section_index)
        return key is not None and key in self._collapsed

    def is_key_collapsed(self, key: str) -> bool:
        return key in self._collapsed

    def toggle(self, section_index: int) -> bool:
        """
        Flip the collapsed state of a section by position.

        Returns:
            New collapsed state; False for unknown indices
        """
        key = self._outline.key_of(section_index)
        if key is None:
            return False
        return self.toggle_key(key)

    def toggle_key(self, key: str) -> bool:
        """Flip the collapsed state of a section by key."""
        if self._outline.index_of_key(key) is None:
            return False
        if key in self._collapsed:
            self._collapsed.discard(key)
            return False
        self._collapsed.add(key)
        return True

    def ensure_expanded_for_slide(self, slide_number: int) -> Optional[int]:
        """
        Expand the collapsible section enclosing a slide.

        Args:
            slide_number: Slide the viewer navigated to

        Returns:
            Index of the section that was expanded, or None if nothing changed
        """
        index = self._outline.top_level_parent_of(slide_number, level=self._level)
        if index is None or not self._outline.contains_slide(index, slide_number):
            return None

        key = self._outline.key_of(index)
        if key not in self._collapsed:
            return None

        self._collapsed.discard(key)
        logger.debug(f"Expanded section {key} for slide {slide_number}")
        return index
