"""Search API endpoints."""
import logging
from typing import Any

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from deckviewer.services import get_viewer_service
from deckviewer.services.search import SearchBatch

logger = logging.getLogger(__name__)
router = APIRouter(tags=["search"])


def _result_payload(viewer, result, query: str) -> dict[str, Any]:
    slide = viewer.get_slide(result.slide_id)
    return {
        "slide_id": result.slide_id,
        "title": result.title,
        "matched_text": result.matched_text,
        "thumbnail": slide.thumbnail if slide else None,
        "title_segments": [s.model_dump() for s in viewer.highlight(result.title, query)],
        "text_segments": [s.model_dump() for s in viewer.highlight(result.matched_text, query)],
    }


@router.get("/api/search")
async def search_slides(
    q: str = Query("", max_length=500, description="Search query, matched against section titles")
) -> dict[str, Any]:
    """
    Search slides by section title.

    Queries shorter than two characters return no results rather than an
    error. Results are ordered by slide number and capped.
    """
    viewer = get_viewer_service()
    results = viewer.search(q)

    return {
        "query": q,
        "results": [_result_payload(viewer, result, q) for result in results],
        "total": len(results),
    }


@router.websocket("/ws/search")
async def live_search(websocket: WebSocket):
    """
    Live search over a WebSocket.

    The client sends ``{"query": "..."}`` on every keystroke and
    ``{"action": "close"}`` when the search surface closes. Only the last
    query of a burst is answered; superseded queries are dropped.
    """
    await websocket.accept()
    viewer = get_viewer_service()

    async def send_results(batch: SearchBatch) -> None:
        await websocket.send_json({
            "query": batch.query,
            "results": [_result_payload(viewer, result, batch.query) for result in batch.results],
            "total": len(batch.results),
        })

    debouncer = viewer.create_debouncer(send_results)

    try:
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                continue
            if message.get("action") == "close":
                debouncer.close()
                await websocket.send_json({"query": "", "results": [], "total": 0, "closed": True})
                continue
            debouncer.submit(str(message.get("query", "")))
    except WebSocketDisconnect:
        logger.debug("Live search client disconnected")
    finally:
        debouncer.close()
