"""API routes for DeckViewer."""

from .routes import search, slides, viewer

__all__ = [
    "search",
    "slides",
    "viewer",
]
