"""Search service package."""

from .index import SearchIndex, build_search_index
from .engine import search, highlight, build_snippet
from .debounce import SearchDebouncer, SearchRequest, SearchBatch

__all__ = [
    "SearchIndex",
    "build_search_index",
    "search",
    "highlight",
    "build_snippet",
    "SearchDebouncer",
    "SearchRequest",
    "SearchBatch",
]
