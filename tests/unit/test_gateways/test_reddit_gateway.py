"""Tests for RedditListingSource."""

import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from feedtui.errors import ApiError, NetworkError
from feedtui.gateways.reddit import RedditListingSource
from feedtui.models import PageRequest, SortMode


def _child(post_id: str, **overrides) -> dict:
    data = {
        "id": post_id,
        "name": f"t3_{post_id}",
        "title": f"Title {post_id}",
        "author": "alice",
        "score": 42,
        "num_comments": 7,
        "created_utc": 1700000000.0,
        "thumbnail": "https://b.thumbs.redditmedia.com/x.jpg",
        "url": f"https://example.com/{post_id}",
        "permalink": f"/r/python/comments/{post_id}/title/",
    }
    data.update(overrides)
    return {"kind": "t3", "data": data}


def _listing(*children, after=None) -> dict:
    return {"kind": "Listing", "data": {"after": after, "children": list(children)}}


def _fetch(handler, request: PageRequest):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            source = RedditListingSource(client=client)
            return await source.fetch_page(request)

    return asyncio.run(run())


def _request(cursor=None, sort_mode=SortMode.HOT) -> PageRequest:
    return PageRequest(feed_id="python", sort_mode=sort_mode, cursor=cursor, limit=10)


def test_fetch_page_builds_request_and_parses_items():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_listing(_child("abc"), _child("def"), after="t3_def"))

    page = _fetch(handler, _request(cursor="t3_xyz", sort_mode=SortMode.TOP))

    assert seen[0].url.path == "/r/python/top.json"
    assert seen[0].url.params["limit"] == "10"
    assert seen[0].url.params["after"] == "t3_xyz"
    assert [item.id for item in page.items] == ["abc", "def"]
    assert page.next_cursor == "t3_def"

    item = page.items[0]
    assert item.title == "Title abc"
    assert item.author == "alice"
    assert item.score == 42
    assert item.comment_count == 7
    assert item.created_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert item.thumbnail_url == "https://b.thumbs.redditmedia.com/x.jpg"
    assert item.target_url == "https://example.com/abc"
    assert item.permalink == "https://reddit.com/r/python/comments/abc/title/"


def test_first_page_has_no_after_param():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_listing())

    page = _fetch(handler, _request())

    assert "after" not in seen[0].url.params
    assert page.items == ()
    assert page.next_cursor is None


def test_non_http_thumbnail_is_dropped():
    def handler(request):
        return httpx.Response(200, json=_listing(_child("a", thumbnail="self"), _child("b", thumbnail="")))

    page = _fetch(handler, _request())

    assert [item.thumbnail_url for item in page.items] == [None, None]


def test_empty_after_means_no_more_pages():
    def handler(request):
        return httpx.Response(200, json=_listing(_child("a"), after=""))

    assert _fetch(handler, _request()).next_cursor is None


def test_error_status_raises_api_error():
    def handler(request):
        return httpx.Response(404, json={"message": "Not Found", "error": 404})

    with pytest.raises(ApiError) as exc_info:
        _fetch(handler, _request())

    assert exc_info.value.status_code == 404
    assert "404" in exc_info.value.message


def test_invalid_json_raises_api_error():
    def handler(request):
        return httpx.Response(200, content=b"<html>blocked</html>")

    with pytest.raises(ApiError):
        _fetch(handler, _request())


def test_malformed_payload_raises_api_error():
    def handler(request):
        return httpx.Response(200, json={"data": {}})

    with pytest.raises(ApiError):
        _fetch(handler, _request())


def test_malformed_child_raises_api_error():
    def handler(request):
        return httpx.Response(200, json=_listing({"kind": "t3"}))

    with pytest.raises(ApiError):
        _fetch(handler, _request())


def test_connect_error_raises_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        _fetch(handler, _request())

    assert isinstance(exc_info.value.cause, httpx.ConnectError)


def test_timeout_raises_network_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        _fetch(handler, _request())


def test_base_url_trailing_slash_is_ignored():
    source = RedditListingSource(base_url="https://old.reddit.com/")

    assert source.build_url(_request()) == "https://old.reddit.com/r/python/hot.json"


def test_injected_client_is_not_closed():
    async def run():
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        async with RedditListingSource(client=client):
            pass
        closed = client.is_closed
        await client.aclose()
        return closed

    assert asyncio.run(run()) is False
