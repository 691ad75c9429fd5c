"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timezone

import pytest

from feedtui.models import Item, Page, PageRequest


def build_item(item_id: str, title: str | None = None, author: str = "someone", score: int = 1) -> Item:
    return Item(
        id=item_id,
        title=title if title is not None else f"Post {item_id}",
        author=author,
        score=score,
        comment_count=0,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        thumbnail_url=None,
        target_url=f"https://example.com/{item_id}",
        permalink=f"https://reddit.com/r/test/comments/{item_id}/",
    )


class FakeListingSource:
    """In-memory listing source.

    Pages are keyed by ``(feed_id, cursor)``. A feed id listed in ``gates``
    blocks until its event is set; exceptions queued in ``failures`` are
    raised once for that feed id.
    """

    def __init__(self, pages: dict | None = None):
        self.pages: dict[tuple[str, str | None], Page] = dict(pages or {})
        self.requests: list[PageRequest] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.failures: dict[str, Exception] = {}

    async def fetch_page(self, request: PageRequest) -> Page:
        self.requests.append(request)
        await asyncio.sleep(0)
        gate = self.gates.get(request.feed_id)
        if gate is not None:
            await gate.wait()
        failure = self.failures.pop(request.feed_id, None)
        if failure is not None:
            raise failure
        return self.pages.get((request.feed_id, request.cursor), Page())


@pytest.fixture
def make_item():
    return build_item


@pytest.fixture
def make_page(make_item):
    def _make_page(*item_ids: str, next_cursor: str | None = None) -> Page:
        return Page(items=tuple(make_item(item_id) for item_id in item_ids), next_cursor=next_cursor)

    return _make_page


@pytest.fixture
def fake_source():
    return FakeListingSource()
