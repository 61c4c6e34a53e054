"""Viewer navigation and outline API endpoints."""
import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from deckviewer.services import get_viewer_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["viewer"])


class NavigateRequest(BaseModel):
    """Request model for direct slide selection."""
    slide: int = Field(..., description="Target slide; clamped to the deck bounds")


@router.get("/viewer")
async def get_viewer_state() -> dict[str, Any]:
    """Get the current slide, its section and navigation flags."""
    viewer = get_viewer_service()
    return viewer.state().model_dump()


@router.post("/viewer/navigate")
async def navigate(request: NavigateRequest) -> dict[str, Any]:
    """
    Jump to a slide.

    Out-of-range slide numbers are clamped to the first or last slide.
    The collapsed section enclosing the new slide is expanded.
    """
    viewer = get_viewer_service()
    return viewer.go_to(request.slide).model_dump()


@router.post("/viewer/next")
async def next_slide() -> dict[str, Any]:
    """Advance one slide; stays on the last slide."""
    viewer = get_viewer_service()
    return viewer.next().model_dump()


@router.post("/viewer/previous")
async def previous_slide() -> dict[str, Any]:
    """Go back one slide; stays on the first slide."""
    viewer = get_viewer_service()
    return viewer.previous().model_dump()


@router.get("/outline")
async def get_outline() -> dict[str, Any]:
    """
    Get the navigation tree for the current slide.

    Each entry carries its slide range and collapsed/active/in-section flags.
    """
    viewer = get_viewer_service()
    return {
        "current_slide": viewer.current_slide,
        "sections": [entry.model_dump() for entry in viewer.outline_tree()],
    }


@router.post("/outline/{key:path}/toggle")
async def toggle_section(key: str) -> dict[str, Any]:
    """Collapse or expand a section by its key."""
    viewer = get_viewer_service()
    collapsed = viewer.toggle(key)

    if collapsed is None:
        raise HTTPException(status_code=404, detail="Section not found")

    return {
        "key": key,
        "collapsed": collapsed,
    }
