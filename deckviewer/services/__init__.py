"""Service layer for DeckViewer."""

from .viewer import ViewerService, get_viewer_service, reset_viewer_service
from .metadata import load_deck, fallback_deck, build_deck, generate_slides, write_metadata

__all__ = [
    "ViewerService",
    "get_viewer_service",
    "reset_viewer_service",
    "load_deck",
    "fallback_deck",
    "build_deck",
    "generate_slides",
    "write_metadata",
]
