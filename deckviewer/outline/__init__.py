"""Outline tree and collapse state for deck navigation."""

from .tree import OutlineModel, OutlineNode
from .collapse import CollapseTracker, initial_state, DEFAULT_COLLAPSED_LEVEL

__all__ = [
    "OutlineModel",
    "OutlineNode",
    "CollapseTracker",
    "initial_state",
    "DEFAULT_COLLAPSED_LEVEL",
]
