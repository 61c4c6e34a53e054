"""Deck and slide API endpoints."""
import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from deckviewer.services import get_viewer_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["slides"])


@router.get("/deck")
async def get_deck() -> dict[str, Any]:
    """
    Get the loaded deck metadata.

    Returns the same camelCase layout as metadata.json.
    """
    viewer = get_viewer_service()
    return viewer.deck.to_document()


@router.get("/slides/{slide_id}")
async def get_slide(slide_id: int) -> dict[str, Any]:
    """Get the image URIs of a single slide."""
    viewer = get_viewer_service()
    slide = viewer.get_slide(slide_id)

    if not slide:
        raise HTTPException(status_code=404, detail="Slide not found")

    return slide.model_dump(by_alias=True)
