#!/usr/bin/env python3
"""
DeckViewer CLI

Commands:
  generate    Write metadata.json for a deck of sequentially numbered slides
  serve       Run the viewer web application
  search      Search a deck's slide titles from the terminal

Usage:
    deckviewer generate --total 42                       # Sample outline, 42 slides
    deckviewer generate --total 42 --sections s.json     # Custom outline
    deckviewer serve --port 8000
    deckviewer search "topic" --metadata public/slides/metadata.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from deckviewer.core import get_settings, setup_logging
from deckviewer.outline import OutlineModel
from deckviewer.services.metadata import build_deck, load_deck, load_sections, write_metadata
from deckviewer.services.search import build_search_index, search

logger = logging.getLogger(__name__)


def print_header(title: str):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate metadata.json."""
    sections = None
    if args.sections:
        try:
            sections = load_sections(args.sections)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read sections from {args.sections}: {e}")
            return 1

    try:
        deck = build_deck(args.total, sections=sections)
    except ValueError as e:
        logger.error(f"Invalid deck: {e}")
        return 1

    output = write_metadata(deck, args.output)

    print("✅ metadata.json generated successfully!")
    print(f"📊 Total slides: {deck.total_slides}")
    print(f"📑 Total sections: {len(deck.sections)}")
    print(f"📁 Output: {output}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the web application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "deckviewer.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    """Search slide titles of a deck."""
    settings = get_settings()
    source = args.metadata or settings.metadata_source
    deck = load_deck(source, fallback_total=settings.fallback_total_slides, timeout=settings.metadata_timeout)

    outline = OutlineModel(deck.sections, deck.total_slides)
    index = build_search_index(deck.slides, outline)
    results = search(
        index,
        args.query,
        limit=args.limit or settings.search_results_limit,
        min_length=settings.search_min_query_length,
        before=settings.search_snippet_before,
        after=settings.search_snippet_after,
    )

    print_header(f"Search: {args.query}")
    if not results:
        print(f"\nNo slides found matching \"{args.query}\"")
        return 0

    for result in results:
        line = f"  #{result.slide_id:<4} {result.title}"
        if result.matched_text != result.title:
            line += f"  ({result.matched_text})"
        print(line)
    print(f"\n{len(results)} result(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deckviewer",
        description="Presentation viewer with section outline and slide search",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write metadata.json for generated slides")
    generate.add_argument("--total", type=int, default=10, help="Number of slides (default: 10)")
    generate.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: <public_dir>/slides/metadata.json)",
    )
    generate.add_argument("--sections", type=Path, default=None, help="JSON file with a list of sections")
    generate.set_defaults(func=cmd_generate)

    serve = subparsers.add_parser("serve", help="Run the viewer web application")
    serve.add_argument("--host", default=None, help="Bind host (default: from settings)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: from settings)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    search_cmd = subparsers.add_parser("search", help="Search slide titles")
    search_cmd.add_argument("query", help="Search query (at least 2 characters)")
    search_cmd.add_argument("--metadata", default=None, help="Metadata file path or URL")
    search_cmd.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    search_cmd.set_defaults(func=cmd_search)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "generate":
        if args.total < 1:
            parser.error("--total must be at least 1")
        if args.output is None:
            args.output = get_settings().metadata_file

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
