"""
Application settings using Pydantic for validation and type safety.
All values can be overridden from environment variables or a .env file.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration with validation."""

    # Application
    app_name: str = Field(default="DeckViewer", description="Application name")
    debug: bool = Field(default=False, description="Debug mode flag")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=7004, ge=1, le=65535, description="Server port")

    # Paths (relative to workspace root)
    public_dir: Path = Field(default=Path("public"), description="Public assets directory")

    @property
    def slides_dir(self) -> Path:
        """Get slide assets directory path (thumbnails, full, high-res)."""
        return self.public_dir / "slides"

    @property
    def metadata_file(self) -> Path:
        """Get the deck metadata document path."""
        return self.slides_dir / "metadata.json"

    # Deck metadata loading
    metadata_url: Optional[str] = Field(
        default=None,
        description="HTTP(S) URL of the metadata document; overrides metadata_file when set"
    )
    metadata_timeout: int = Field(
        default=10,
        ge=1,
        le=120,
        description="Metadata download timeout in seconds"
    )
    fallback_total_slides: int = Field(
        default=10,
        ge=1,
        description="Number of synthetic slides generated when metadata cannot be loaded"
    )

    # Search Configuration
    search_min_query_length: int = Field(
        default=2,
        ge=1,
        description="Queries shorter than this (after trimming) return no results"
    )
    search_results_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Maximum number of slides returned by search"
    )
    search_snippet_before: int = Field(
        default=30,
        ge=0,
        description="Characters of context kept before a text match"
    )
    search_snippet_after: int = Field(
        default=50,
        ge=0,
        description="Characters of context kept after a text match"
    )
    search_debounce_ms: int = Field(
        default=150,
        ge=0,
        le=5000,
        description="Live search debounce delay in milliseconds"
    )

    # Outline Configuration
    collapsed_level: int = Field(
        default=1,
        ge=0,
        description="Outline level collapsed by default and auto-expanded on navigation"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @property
    def metadata_source(self) -> str:
        """Get the metadata source, preferring a configured URL."""
        if self.metadata_url:
            return self.metadata_url
        return str(self.metadata_file)

    @property
    def search_debounce_seconds(self) -> float:
        """Get the debounce delay in seconds for asyncio scheduling."""
        return self.search_debounce_ms / 1000

    @field_validator("public_dir")
    @classmethod
    def validate_public_dir(cls, v: Path) -> Path:
        """Ensure public directory path is valid."""
        return Path(v)

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        for dir_path in [
            self.public_dir,
            self.slides_dir,
        ]:
            dir_path.mkdir(parents=True, exist_ok=True)

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        env_prefix = ""
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Using lru_cache ensures settings are loaded once and reused.
    """
    return Settings()
