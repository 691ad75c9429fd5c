"""Data types shared by the listing source, the coordinator and the UI."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Protocol


class SortMode(str, Enum):
    HOT = "hot"
    NEW = "new"
    TOP = "top"
    RISING = "rising"


class MergeMode(str, Enum):
    RESET = "reset"
    APPEND = "append"


@dataclass(frozen=True)
class Item:
    """A single post of a feed. Identity is ``id``."""

    id: str
    title: str
    author: str
    score: int
    comment_count: int
    created_at: datetime
    thumbnail_url: str | None
    target_url: str
    permalink: str


@dataclass(frozen=True)
class FeedContext:
    """The (feed, sort mode) pair being paginated."""

    feed_id: str
    sort_mode: SortMode = SortMode.HOT

    def __str__(self) -> str:
        return f"/r/{self.feed_id}/{self.sort_mode.value}"


@dataclass(frozen=True)
class PageRequest:
    """Everything a listing source needs to fetch one page."""

    feed_id: str
    sort_mode: SortMode
    cursor: str | None
    limit: int

    @classmethod
    def for_context(cls, context: FeedContext, cursor: str | None, limit: int) -> "PageRequest":
        return cls(feed_id=context.feed_id, sort_mode=context.sort_mode, cursor=cursor, limit=limit)


@dataclass(frozen=True)
class Page:
    items: tuple[Item, ...] = ()
    next_cursor: str | None = None


@dataclass(frozen=True)
class ErrorInfo:
    message: str
    cause: BaseException | None = None


@dataclass
class FetchState:
    """Mutable pagination state. Owned and mutated only by FetchCoordinator."""

    items: list[Item] = field(default_factory=list)
    cursor: str | None = None
    is_loading: bool = False
    has_more: bool = True
    error: ErrorInfo | None = None
    page_count: int = 0


@dataclass(frozen=True)
class FeedSnapshot:
    """Read-only view handed to the presentation layer after every change."""

    visible_items: tuple[Item, ...]
    total_count: int
    is_loading: bool
    error: ErrorInfo | None
    has_more: bool
    page_count: int
    context: FeedContext | None = None
    search_term: str = ""


class ListingSource(Protocol):
    async def fetch_page(self, request: PageRequest) -> Page: ...
