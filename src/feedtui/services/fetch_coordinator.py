"""Pagination state machine for a single feed view."""

from dataclasses import dataclass
from typing import Callable

from loguru import logger

from feedtui.errors import FeedError
from feedtui.models import (
    ErrorInfo,
    FeedContext,
    FeedSnapshot,
    FetchState,
    ListingSource,
    MergeMode,
    Page,
    PageRequest,
)
from feedtui.services.filter_view import visible
from feedtui.services.page_merger import merge

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class _Ticket:
    context: FeedContext
    generation: int


class FetchCoordinator:
    """Owns the FetchState of a feed view and decides when to hit the source.

    All entry points run on one event loop. A fetch is tagged with the context
    and reset generation it was issued for; a result that arrives after a newer
    reset is dropped instead of merged.
    """

    def __init__(
        self,
        source: ListingSource,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_change: Callable[[FeedSnapshot], None] | None = None,
    ):
        self._source = source
        self._page_size = page_size
        self._on_change = on_change
        self._ticket: _Ticket | None = None
        self._state = FetchState()
        self._search_term = ""

    @property
    def context(self) -> FeedContext | None:
        return self._ticket.context if self._ticket else None

    @property
    def search_term(self) -> str:
        return self._search_term

    def snapshot(self) -> FeedSnapshot:
        state = self._state
        return FeedSnapshot(
            visible_items=tuple(visible(state.items, self._search_term)),
            total_count=len(state.items),
            is_loading=state.is_loading,
            error=state.error,
            has_more=state.has_more,
            page_count=state.page_count,
            context=self.context,
            search_term=self._search_term,
        )

    # ------------------------- Entry points ------------------------- #

    async def request_reset(self, context: FeedContext | None = None) -> None:
        """Drop the collection and start paginating ``context`` from the top.

        Without a context the current one is reloaded (manual refresh).
        """
        if context is None:
            context = self.context
            if context is None:
                raise ValueError("No feed context to refresh")

        generation = self._ticket.generation + 1 if self._ticket else 1
        self._ticket = _Ticket(context, generation)
        self._state = FetchState(is_loading=True)
        logger.info(f"Resetting feed {context} (generation {generation})")
        self._notify()

        await self._fetch(MergeMode.RESET)

    async def refresh(self) -> None:
        await self.request_reset()

    async def request_more(self) -> bool:
        """Fetch the next page unless a fetch is running or the feed is exhausted.

        Returns whether a fetch was issued.
        """
        state = self._state
        if self._ticket is None or state.is_loading or not state.has_more:
            return False

        state.is_loading = True
        state.error = None
        self._notify()

        await self._fetch(MergeMode.APPEND)
        return True

    def set_search_term(self, term: str) -> None:
        self._search_term = term or ""
        self._notify()

    # ------------------------- Fetch handling ------------------------- #

    async def _fetch(self, mode: MergeMode) -> None:
        ticket = self._ticket
        cursor = None if mode is MergeMode.RESET else self._state.cursor
        request = PageRequest.for_context(ticket.context, cursor, self._page_size)

        try:
            page = await self._source.fetch_page(request)
        except FeedError as e:
            self._on_failure(ticket, e, e.message)
            return
        except Exception as e:
            logger.exception(f"Unexpected error fetching {ticket.context}")
            self._on_failure(ticket, e, str(e) or e.__class__.__name__)
            return

        if self._is_stale(ticket):
            logger.info(f"Discarding stale page for {ticket.context} (generation {ticket.generation})")
            return
        self._on_success(page, mode)

    def _is_stale(self, ticket: _Ticket) -> bool:
        return ticket != self._ticket

    def _on_success(self, page: Page, mode: MergeMode) -> None:
        state = self._state
        before = len(state.items) if mode is MergeMode.APPEND else 0
        state.items = merge(state.items, page.items, mode)

        dropped = len(page.items) - (len(state.items) - before)
        if dropped:
            logger.debug(f"Dropped {dropped} duplicate item(s) from page {state.page_count + 1}")

        state.cursor = page.next_cursor or None
        state.has_more = bool(page.items) and state.cursor is not None
        state.is_loading = False
        state.error = None
        state.page_count += 1
        self._notify()

    def _on_failure(self, ticket: _Ticket, error: Exception, message: str) -> None:
        if self._is_stale(ticket):
            logger.info(f"Ignoring failure of stale fetch for {ticket.context}: {message}")
            return

        logger.warning(f"Fetching {ticket.context} failed: {message}")
        self._state.error = ErrorInfo(message=message or "Failed to fetch posts", cause=error)
        self._state.is_loading = False
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
