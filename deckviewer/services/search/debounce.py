"""
Debounced live search.

Each submitted query supersedes the previous one: the pending run is
cancelled and a generation counter guarantees that a superseded run can
never deliver results, even if it was already past its delay.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from deckviewer.models.search import SearchResult

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.15


@dataclass(frozen=True)
class SearchRequest:
    """Token identifying one submitted query."""
    generation: int
    query: str


@dataclass
class SearchBatch:
    """Results delivered for the current query."""
    query: str
    generation: int
    results: list[SearchResult] = field(default_factory=list)


class SearchDebouncer:
    """
    Runs the latest query after a quiet period and drops superseded ones.

    Must be used from a running event loop.
    """

    def __init__(
        self,
        search_fn: Callable[[str], list[SearchResult]],
        on_results: Optional[Callable[[SearchBatch], Awaitable[None]]] = None,
        delay: float = DEFAULT_DELAY,
    ):
        """
        Initialize the debouncer.

        Args:
            search_fn: Synchronous search to run for a query
            on_results: Async callback receiving each delivered batch
            delay: Quiet period in seconds before a query runs
        """
        self._search_fn = search_fn
        self._on_results = on_results
        self._delay = delay
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None
        self.query = ""
        self.results: list[SearchResult] = []

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def is_current(self, request: SearchRequest) -> bool:
        return request.generation == self._generation

    def submit(self, query: str) -> SearchRequest:
        """Schedule a query, cancelling any query still waiting."""
        self._cancel_pending()
        self._generation += 1
        self.query = query
        request = SearchRequest(generation=self._generation, query=query)
        self._pending = asyncio.create_task(self._run(request))
        return request

    def close(self) -> None:
        """Cancel the pending query and clear the current query and results."""
        self._cancel_pending()
        self._generation += 1
        self.query = ""
        self.results = []

    async def wait(self) -> None:
        """Wait until the pending query, if any, has finished or been cancelled."""
        if self._pending is not None:
            await asyncio.wait({self._pending})

    def _cancel_pending(self) -> None:
        if self.has_pending:
            self._pending.cancel()
        self._pending = None

    async def _run(self, request: SearchRequest) -> None:
        await asyncio.sleep(self._delay)
        if not self.is_current(request):
            return

        results = self._search_fn(request.query)
        if not self.is_current(request):
            logger.debug(f"Discarding superseded results for '{request.query}'")
            return

        self.results = results
        if self._on_results is not None:
            try:
                await self._on_results(SearchBatch(
                    query=request.query,
                    generation=request.generation,
                    results=results,
                ))
            except Exception as e:
                logger.warning(f"Failed to deliver results for '{request.query}': {e}")
