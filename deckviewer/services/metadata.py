"""
Deck metadata loading and generation.

The deck is described by a single ``metadata.json`` document, read once from
a local file or an HTTP(S) URL. When it cannot be read or fails validation,
a synthetic deck is generated so the viewer always has something to show.

Security: asset paths are generated from slide numbers only, never from input.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import requests
from pydantic import ValidationError

from deckviewer.models.slide import DeckMetadata, Section, Slide

logger = logging.getLogger(__name__)

# Asset layout under the public directory; must match existing exports exactly
THUMBNAIL_PATH = "/slides/thumbnails/slide-{:04d}.jpg"
FULL_PATH = "/slides/full/slide-{:04d}.jpg"
HIGH_RES_PATH = "/slides/high-res/slide-{:04d}.jpg"

DEFAULT_SECTION = Section(title="Introduction", start_slide=1, level=0)

SAMPLE_SECTIONS = (
    Section(title="Introduction", start_slide=1, level=0),
    Section(title="Background", start_slide=2, level=1),
    Section(title="Main Content", start_slide=4, level=0),
    Section(title="Topic A", start_slide=4, level=1),
    Section(title="Subtopic A1", start_slide=5, level=2),
    Section(title="Topic B", start_slide=7, level=1),
    Section(title="Conclusion", start_slide=9, level=0),
)


def generate_slides(total: int) -> list[Slide]:
    """Generate sequentially numbered slides following the asset path layout."""
    return [
        Slide(
            id=number,
            thumbnail=THUMBNAIL_PATH.format(number),
            full=FULL_PATH.format(number),
            high_res=HIGH_RES_PATH.format(number),
        )
        for number in range(1, total + 1)
    ]


def build_deck(total: int, sections: Optional[Sequence[Section]] = None) -> DeckMetadata:
    """
    Build deck metadata for generated slides.

    Args:
        total: Number of slides
        sections: Outline sections (defaults to the sample outline)

    Returns:
        Validated DeckMetadata
    """
    if sections is None:
        sections = SAMPLE_SECTIONS
    return DeckMetadata(
        total_pages=total,
        slides=generate_slides(total),
        sections=list(sections),
    )


def fallback_deck(total: int) -> DeckMetadata:
    """Get the synthetic deck used when metadata is unavailable."""
    return build_deck(total, sections=[DEFAULT_SECTION])


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_document(source: Union[str, Path], timeout: int = 10) -> dict:
    """
    Read the raw metadata document.

    Args:
        source: File path or HTTP(S) URL
        timeout: HTTP timeout in seconds

    Raises:
        OSError: If the file cannot be read
        requests.RequestException: If the download fails
        ValueError: If the content is not valid JSON
    """
    source = str(source)
    if _is_url(source):
        response = requests.get(source, timeout=timeout, headers={"Accept": "application/json"})
        response.raise_for_status()
        return response.json()
    return json.loads(Path(source).read_text(encoding="utf-8"))


def load_deck(
    source: Union[str, Path],
    fallback_total: int = 10,
    timeout: int = 10,
) -> DeckMetadata:
    """
    Load deck metadata, falling back to a synthetic deck on any failure.

    Args:
        source: File path or HTTP(S) URL of metadata.json
        fallback_total: Slide count of the synthetic deck
        timeout: HTTP timeout in seconds

    Returns:
        DeckMetadata from the source, or the fallback deck
    """
    try:
        document = fetch_document(source, timeout=timeout)
        deck = DeckMetadata.model_validate(document)
    except (OSError, requests.RequestException, ValidationError, ValueError) as e:
        logger.warning(f"Could not load deck metadata from {source}: {e}")
        logger.warning(f"Using generated fallback deck with {fallback_total} slides")
        return fallback_deck(fallback_total)

    logger.info(f"Loaded deck metadata: {deck.total_slides} slides, {len(deck.sections)} sections")
    return deck


def write_metadata(deck: DeckMetadata, output_file: Path) -> Path:
    """Write deck metadata as an indented camelCase JSON document."""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(json.dumps(deck.to_document(), indent=2) + "\n", encoding="utf-8")
    return output_file


def load_sections(sections_file: Path) -> list[Section]:
    """Read a JSON list of sections (camelCase keys) from a file."""
    data = json.loads(Path(sections_file).read_text(encoding="utf-8"))
    return [Section.model_validate(item) for item in data]
