"""
Unit tests for the viewer session service.
"""
from unittest.mock import patch

import pytest

from deckviewer.core import Settings
from deckviewer.services import viewer as viewer_module
from deckviewer.services.metadata import fallback_deck
from deckviewer.services.viewer import ViewerService, get_viewer_service, reset_viewer_service


@pytest.fixture
def viewer(sample_deck):
    return ViewerService(deck=sample_deck)


def find_entry(entries, title):
    for entry in entries:
        if entry.title == title:
            return entry
        found = find_entry(entry.children, title)
        if found:
            return found
    return None


class TestNavigation:
    """Tests for slide navigation."""

    def test_starts_on_first_slide(self, viewer):
        """Test the initial state."""
        state = viewer.state()

        assert state.current_slide == 1
        assert state.total_slides == 10
        assert state.current_section == "Intro"
        assert state.has_previous is False
        assert state.has_next is True
        assert state.progress == 0

    def test_go_to_clamps(self, viewer):
        """Test out-of-range targets are clamped."""
        assert viewer.go_to(0).current_slide == 1
        assert viewer.go_to(-5).current_slide == 1
        assert viewer.go_to(99).current_slide == 10

    def test_next_and_previous_stop_at_bounds(self, viewer):
        """Test stepping past either end stays put."""
        assert viewer.previous().current_slide == 1

        viewer.go_to(10)
        state = viewer.next()

        assert state.current_slide == 10
        assert state.has_next is False
        assert state.progress == 100

    def test_progress(self, viewer):
        """Test progress percentage."""
        assert viewer.go_to(4).progress == pytest.approx(100 / 3)

    def test_single_slide_deck(self):
        """Test progress does not divide by zero."""
        viewer = ViewerService(deck=fallback_deck(1))
        state = viewer.state()

        assert state.progress == 0
        assert state.has_next is False

    def test_navigation_expands_group(self, viewer):
        """Test entering a collapsed group expands it."""
        assert viewer.collapse.is_key_collapsed("4:1:TopicA") is True

        state = viewer.go_to(5)

        assert state.current_section == "Sub A1"
        assert viewer.collapse.is_key_collapsed("4:1:TopicA") is False


class TestOutlineTree:
    """Tests for the rendered navigation tree."""

    def test_tree_shape(self, viewer):
        """Test roots and nesting."""
        tree = viewer.outline_tree()

        assert [e.title for e in tree] == ["Intro", "Main", "Conclusion"]
        assert [e.title for e in tree[1].children] == ["TopicA", "TopicB"]
        assert [e.title for e in tree[1].children[0].children] == ["Sub A1"]

    def test_flags_follow_current_slide(self, viewer):
        """Test active and in-section flags."""
        viewer.go_to(5)
        tree = viewer.outline_tree()

        sub = find_entry(tree, "Sub A1")
        topic_a = find_entry(tree, "TopicA")
        main = find_entry(tree, "Main")
        topic_b = find_entry(tree, "TopicB")

        assert sub.active is True
        assert topic_a.active is False
        assert topic_a.in_section is True
        assert main.in_section is True
        assert topic_b.in_section is False
        assert topic_b.collapsed is True
        assert (main.start_slide, main.end_slide) == (4, 8)

    def test_toggle(self, viewer):
        """Test toggling by key."""
        assert viewer.toggle("2:1:Background") is False
        assert find_entry(viewer.outline_tree(), "Background").collapsed is False
        assert viewer.toggle("2:1:Background") is True

    def test_toggle_unknown_key(self, viewer):
        """Test unknown keys are reported."""
        assert viewer.toggle("3:0:Nothing") is None


class TestViewerSearch:
    """Tests for search through the viewer."""

    def test_search(self, viewer):
        """Test searching the session index."""
        assert [r.slide_id for r in viewer.search("topic")] == [4, 7, 8]

    def test_search_limit_from_settings(self, sample_deck):
        """Test the configured result limit applies."""
        with patch("deckviewer.services.viewer.get_settings", return_value=Settings(search_results_limit=2)):
            viewer = ViewerService(deck=sample_deck)

        assert len(viewer.search("slide")) == 2

    def test_load_rebuilds(self, viewer):
        """Test replacing the deck rebuilds the index and resets navigation."""
        viewer.go_to(7)
        viewer.load(fallback_deck(3))

        assert viewer.current_slide == 1
        assert len(viewer.index) == 3
        assert [r.slide_id for r in viewer.search("introduction")] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_debouncer_uses_settings_delay(self, sample_deck):
        """Test debouncer creation."""
        with patch("deckviewer.services.viewer.get_settings", return_value=Settings(search_debounce_ms=10)):
            viewer = ViewerService(deck=sample_deck)

        delivered = []

        async def on_results(batch):
            delivered.append(batch)

        debouncer = viewer.create_debouncer(on_results)
        debouncer.submit("topic")
        await debouncer.wait()

        assert [r.slide_id for r in delivered[0].results] == [4, 7, 8]


class TestViewerServiceFactory:
    """Tests for get_viewer_service factory function."""

    def test_loads_configured_source(self, tmp_path):
        """Test the singleton loads the deck from settings."""
        settings = Settings(public_dir=tmp_path, fallback_total_slides=7)
        reset_viewer_service()

        try:
            with patch("deckviewer.services.viewer.get_settings", return_value=settings):
                service = get_viewer_service()
                assert isinstance(service, ViewerService)
                # No metadata.json under tmp_path: fallback deck
                assert service.total_slides == 7
                assert get_viewer_service() is service
        finally:
            reset_viewer_service()

        assert viewer_module._viewer_service is None
