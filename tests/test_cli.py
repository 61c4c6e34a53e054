"""
Unit tests for the command-line interface.
"""
import json
from unittest.mock import patch

import pytest

from deckviewer.cli import build_parser, main
from deckviewer.core import Settings
from deckviewer.services.metadata import write_metadata


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_writes_metadata(self, tmp_path, capsys):
        """Test generating metadata with the sample outline."""
        output = tmp_path / "slides" / "metadata.json"

        assert main(["generate", "--total", "12", "--output", str(output)]) == 0

        data = json.loads(output.read_text())
        assert data["totalPages"] == 12
        assert len(data["slides"]) == 12
        assert len(data["sections"]) == 7
        assert "Total slides: 12" in capsys.readouterr().out

    def test_custom_sections(self, tmp_path):
        """Test generating metadata with a custom outline."""
        sections = tmp_path / "sections.json"
        sections.write_text(json.dumps([{"title": "Only", "startSlide": 1, "level": 0}]))
        output = tmp_path / "metadata.json"

        assert main(["generate", "--total", "2", "--sections", str(sections), "--output", str(output)]) == 0
        assert json.loads(output.read_text())["sections"] == [{"title": "Only", "startSlide": 1, "level": 0}]

    def test_unreadable_sections(self, tmp_path):
        """Test a missing sections file fails cleanly."""
        result = main([
            "generate",
            "--sections", str(tmp_path / "missing.json"),
            "--output", str(tmp_path / "metadata.json"),
        ])

        assert result == 1
        assert not (tmp_path / "metadata.json").exists()

    def test_total_must_be_positive(self, tmp_path):
        """Test invalid slide counts are rejected."""
        with pytest.raises(SystemExit):
            main(["generate", "--total", "0", "--output", str(tmp_path / "m.json")])


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_deck(self, tmp_path, sample_deck, capsys):
        """Test searching a metadata file."""
        path = write_metadata(sample_deck, tmp_path / "metadata.json")

        assert main(["search", "topic", "--metadata", str(path)]) == 0

        out = capsys.readouterr().out
        assert "#4" in out
        assert "TopicB" in out
        assert "3 result(s)" in out

    def test_no_results(self, tmp_path, sample_deck, capsys):
        """Test reporting an empty result set."""
        path = write_metadata(sample_deck, tmp_path / "metadata.json")

        assert main(["search", "zz", "--metadata", str(path)]) == 0
        assert "No slides found" in capsys.readouterr().out

    def test_snippet_window_from_settings(self, tmp_path, sample_deck, capsys):
        """Test text-match snippets use the configured context window."""
        path = write_metadata(sample_deck, tmp_path / "metadata.json")
        settings = Settings(search_snippet_before=0, search_snippet_after=2)

        with patch("deckviewer.cli.get_settings", return_value=settings):
            assert main(["search", "slide 4", "--metadata", str(path)]) == 0

        assert "(Slide 4 T...)" in capsys.readouterr().out


class TestServeCommand:
    """Tests for the serve command."""

    def test_runs_uvicorn(self):
        """Test serve delegates to uvicorn."""
        with patch("uvicorn.run") as mock_run:
            assert main(["serve", "--port", "9000"]) == 0

        assert mock_run.call_args.args[0] == "deckviewer.main:app"
        assert mock_run.call_args.kwargs["port"] == 9000

    def test_parser_requires_command(self):
        """Test a command is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
