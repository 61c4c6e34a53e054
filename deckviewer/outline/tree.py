"""
Outline model.

Turns the flat, slide-ordered section list of a deck into a navigation tree
in one stack-based pass, and answers range and "current section" queries
over it.

Precondition: sections are sorted by ``start_slide``. The metadata loader
enforces this; the model itself does not re-check it.
"""
import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Optional, Sequence

from deckviewer.models.slide import Section

logger = logging.getLogger(__name__)


@dataclass
class OutlineNode:
    """A section placed in the tree, with its resolved slide range."""
    index: int
    section: Section
    key: str = ""
    end_slide: int = 0
    parent: Optional["OutlineNode"] = field(default=None, repr=False)
    children: list["OutlineNode"] = field(default_factory=list, repr=False)

    @property
    def level(self) -> int:
        return self.section.level

    @property
    def start_slide(self) -> int:
        return self.section.start_slide

    def contains(self, slide_number: int) -> bool:
        """Check whether the slide lies within this section's range."""
        return self.start_slide <= slide_number <= self.end_slide


class OutlineModel:
    """
    Read-only tree view over a deck's sections.

    A section's children are the following entries exactly one level deeper,
    up to the next entry at the same or a shallower level. A section's range
    ends just before that same-or-shallower entry, or at the last slide.
    """

    def __init__(self, sections: Sequence[Section], total_slides: int):
        """
        Build the tree.

        Args:
            sections: Flat section list sorted by start slide
            total_slides: Number of slides in the deck
        """
        self._sections = list(sections)
        self.total_slides = total_slides
        self._nodes = [OutlineNode(index=i, section=s) for i, s in enumerate(self._sections)]
        self._starts = [s.start_slide for s in self._sections]
        self._by_key: dict[str, int] = {}
        self.roots: list[OutlineNode] = []
        self._build()

    def _build(self) -> None:
        stack: list[OutlineNode] = []
        for node in self._nodes:
            # Entries at the same or a shallower level close the open ranges
            while stack and stack[-1].level >= node.level:
                stack.pop().end_slide = node.start_slide - 1

            if stack and stack[-1].level == node.level - 1:
                node.parent = stack[-1]
                stack[-1].children.append(node)
            elif node.level == 0:
                self.roots.append(node)
            else:
                logger.debug(f"Section '{node.section.title}' has no parent at level {node.level - 1}")

            stack.append(node)
            node.key = self._unique_key(node.section.key)
            self._by_key[node.key] = node.index

        for node in stack:
            node.end_slide = self.total_slides

    def _unique_key(self, key: str) -> str:
        # Repeated sections get an occurrence suffix: "3:1:Results#2"
        candidate, occurrence = key, 1
        while candidate in self._by_key:
            occurrence += 1
            candidate = f"{key}#{occurrence}"
        return candidate

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def sections(self) -> list[Section]:
        return list(self._sections)

    @property
    def nodes(self) -> list[OutlineNode]:
        """All nodes in flat (section list) order."""
        return list(self._nodes)

    def node(self, section_index: int) -> Optional[OutlineNode]:
        if 0 <= section_index < len(self._nodes):
            return self._nodes[section_index]
        return None

    def key_of(self, section_index: int) -> Optional[str]:
        node = self.node(section_index)
        return node.key if node else None

    def index_of_key(self, key: str) -> Optional[int]:
        return self._by_key.get(key)

    def children_of(self, section_index: int) -> list[Section]:
        """
        Get the immediate child sections of a section.

        Args:
            section_index: Position of the parent in the flat section list

        Returns:
            Child sections in order; empty for leaves and unknown indices
        """
        node = self.node(section_index)
        if node is None:
            return []
        return [child.section for child in node.children]

    def section_range_of(self, section_index: int) -> Optional[tuple[int, int]]:
        """Get the (start_slide, end_slide) range of a section."""
        node = self.node(section_index)
        if node is None:
            return None
        return node.start_slide, node.end_slide

    def contains_slide(self, section_index: int, slide_number: int) -> bool:
        node = self.node(section_index)
        return node is not None and node.contains(slide_number)

    def index_containing(self, slide_number: int) -> Optional[int]:
        """
        Get the index of the last section starting at or before the slide.

        Slides before the first section resolve to the first section.

        Returns:
            Section index, or None when the deck has no sections
        """
        if not self._nodes:
            return None
        position = bisect_right(self._starts, slide_number) - 1
        return max(position, 0)

    def section_containing(self, slide_number: int) -> Optional[Section]:
        """Get the current section for a slide, or None when there are no sections."""
        index = self.index_containing(slide_number)
        if index is None:
            return None
        return self._sections[index]

    def top_level_parent_of(self, slide_number: int, level: int = 0) -> Optional[int]:
        """
        Get the last section at ``level`` starting at or before the slide.

        Args:
            slide_number: Slide to resolve
            level: Outline level to look for (0 = top level)

        Returns:
            Section index, or None if no section at that level qualifies
        """
        for i in range(len(self._nodes) - 1, -1, -1):
            node = self._nodes[i]
            if node.level == level and node.start_slide <= slide_number:
                return i
        return None
