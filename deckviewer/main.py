"""
DeckViewer - Main Application Entry Point

Serves a slide deck with a collapsible section outline and title search.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from deckviewer import __version__
from deckviewer.core import get_settings, setup_logging
from deckviewer.api.routes import search, slides, viewer

# Configure logging
setup_logging(logging.DEBUG if get_settings().debug else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()

    # Startup
    logger.info(f"🚀 Starting {settings.app_name}...")
    logger.info(f"📁 Public directory: \033[93m{settings.public_dir}\033[0m")
    logger.info(f"📄 Metadata source: \033[93m{settings.metadata_source}\033[0m")

    settings.ensure_directories()

    # Load the deck once; a failed load falls back to generated slides
    from deckviewer.services import get_viewer_service
    viewer_service = get_viewer_service()
    logger.info(
        f"✅ Deck loaded: {viewer_service.total_slides} slides, "
        f"{len(viewer_service.outline)} sections"
    )

    yield

    # Shutdown
    logger.info(f"👋 Shutting down {settings.app_name}...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Presentation viewer with section outline and slide search",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(slides.router, tags=["slides"])
    app.include_router(viewer.router, tags=["viewer"])
    app.include_router(search.router, tags=["search"])

    # Serve slide images (thumbnails, full, high-res)
    slides_dir = settings.slides_dir
    if slides_dir.exists():
        app.mount("/slides", StaticFiles(directory=slides_dir), name="slides")

    # Templates
    templates_dir = Path(__file__).parent / "web" / "templates"
    templates = Jinja2Templates(directory=templates_dir)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Serve the viewer page."""
        from deckviewer.services import get_viewer_service
        viewer_service = get_viewer_service()
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "app_name": settings.app_name,
                "state": viewer_service.state(),
                "slide": viewer_service.get_slide(viewer_service.current_slide),
                "outline": viewer_service.outline_tree(),
                "debounce_ms": settings.search_debounce_ms,
            }
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        from deckviewer.services import get_viewer_service
        viewer_service = get_viewer_service()

        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "total_slides": viewer_service.total_slides,
            "sections": len(viewer_service.outline),
            "indexed_slides": len(viewer_service.index),
        }

    @app.get("/api/config")
    async def get_public_config():
        """Get public configuration."""
        return {
            "app_name": settings.app_name,
            "search_min_query_length": settings.search_min_query_length,
            "search_limit": settings.search_results_limit,
            "search_debounce_ms": settings.search_debounce_ms,
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "deckviewer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
