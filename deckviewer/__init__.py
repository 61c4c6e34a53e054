"""
DeckViewer

A presentation viewer core: a collapsible section outline, current-section
resolution and substring search over slide titles, served by FastAPI.
"""

__version__ = "1.0.0"
__author__ = "DeckViewer Team"
