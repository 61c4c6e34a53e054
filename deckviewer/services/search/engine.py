"""
Substring query engine over the search index.

Matching is a case-insensitive substring test against each entry's title
and text. Results come back in slide order, not by relevance.
"""
import re

from deckviewer.models.search import HighlightSegment, SearchResult
from deckviewer.services.search.index import SearchIndex

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 20
SNIPPET_BEFORE = 30
SNIPPET_AFTER = 50
ELLIPSIS = "..."


def build_snippet(
    text: str,
    query: str,
    before: int = SNIPPET_BEFORE,
    after: int = SNIPPET_AFTER,
) -> str:
    """
    Cut a window of text around the first match of the query.

    Args:
        text: Text containing the query
        query: Query string (matched case-insensitively)
        before: Characters of context kept before the match
        after: Characters of context kept after the end of the match

    Returns:
        Snippet with an ellipsis on each truncated side
    """
    match_index = text.lower().find(query.lower())
    if match_index < 0:
        return text

    start = max(0, match_index - before)
    end = min(len(text), match_index + len(query) + after)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return f"{prefix}{text[start:end]}{suffix}"


def search(
    index: SearchIndex,
    query: str,
    limit: int = MAX_RESULTS,
    min_length: int = MIN_QUERY_LENGTH,
    before: int = SNIPPET_BEFORE,
    after: int = SNIPPET_AFTER,
) -> list[SearchResult]:
    """
    Search the index for slides whose title or text contains the query.

    Args:
        index: Search index to query
        query: Raw query string; surrounding whitespace is ignored
        limit: Maximum number of results
        min_length: Queries shorter than this return no results
        before: Snippet context before a text match
        after: Snippet context after a text match

    Returns:
        Matching slides sorted by slide id
    """
    query = (query or "").strip()
    if len(query) < min_length:
        return []

    lower_query = query.lower()
    results: list[SearchResult] = []

    for slide_id, entry in index.items():
        title_match = lower_query in entry.title.lower()
        text_match = lower_query in entry.text.lower()
        if not (title_match or text_match):
            continue

        matched_text = entry.title
        if text_match and not title_match:
            matched_text = build_snippet(entry.text, query, before=before, after=after)

        results.append(SearchResult(
            slide_id=slide_id,
            title=entry.title,
            matched_text=matched_text,
        ))

    results.sort(key=lambda r: r.slide_id)
    return results[:limit]


def highlight(text: str, query: str, min_length: int = MIN_QUERY_LENGTH) -> list[HighlightSegment]:
    """
    Split text into plain and matched segments for display.

    The query is matched literally and case-insensitively.
    """
    query = (query or "").strip()
    if not text:
        return []
    if len(query) < min_length:
        return [HighlightSegment(text=text)]

    # The capturing group keeps matches at odd positions of the split
    parts = re.split(f"({re.escape(query)})", text, flags=re.IGNORECASE)
    return [
        HighlightSegment(text=part, matched=position % 2 == 1)
        for position, part in enumerate(parts)
        if part
    ]
