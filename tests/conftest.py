"""
Pytest configuration and fixtures.
"""
import pytest

from deckviewer.core import get_settings
from deckviewer.models.slide import DeckMetadata, Section
from deckviewer.services.metadata import generate_slides


@pytest.fixture
def sample_sections():
    """Outline with three levels: two level-1 groups and one level-2 entry."""
    return [
        Section(title="Intro", start_slide=1, level=0),
        Section(title="Background", start_slide=2, level=1),
        Section(title="Main", start_slide=4, level=0),
        Section(title="TopicA", start_slide=4, level=1),
        Section(title="Sub A1", start_slide=5, level=2),
        Section(title="TopicB", start_slide=7, level=1),
        Section(title="Conclusion", start_slide=9, level=0),
    ]


@pytest.fixture
def sample_deck(sample_sections):
    """Ten-slide deck using the sample outline."""
    return DeckMetadata(
        total_pages=10,
        slides=generate_slides(10),
        sections=sample_sections,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings fresh from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clean_environment(monkeypatch):
    """Provide a clean environment for tests."""
    env_vars = [
        "METADATA_URL",
        "PUBLIC_DIR",
        "SEARCH_RESULTS_LIMIT",
        "SEARCH_DEBOUNCE_MS",
        "DEBUG",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
