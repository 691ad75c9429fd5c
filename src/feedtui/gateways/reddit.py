from datetime import datetime, timezone

import httpx
from loguru import logger

from feedtui.errors import ApiError, NetworkError
from feedtui.models import Item, Page, PageRequest

DEFAULT_BASE_URL = "https://www.reddit.com"
DEFAULT_USER_AGENT = "feedtui/0.1 (terminal feed viewer)"
PERMALINK_HOST = "https://reddit.com"


class RedditListingSource:
    """Listing source backed by Reddit's public JSON listings."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "RedditListingSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(headers={"User-Agent": self.user_agent}, timeout=self.timeout)
            self._owns_client = True
        return self._client

    @staticmethod
    def build_params(request: PageRequest) -> dict:
        params = {"limit": request.limit}
        if request.cursor:
            params["after"] = request.cursor
        return params

    def build_url(self, request: PageRequest) -> str:
        return f"{self.base_url}/r/{request.feed_id}/{request.sort_mode.value}.json"

    # -------------------------Fetch------------------------- #

    async def fetch_page(self, request: PageRequest) -> Page:
        url = self.build_url(request)
        logger.info(f"Fetching {url} (after={request.cursor or '-'}, limit={request.limit})")

        try:
            response = await self._get_client().get(url, params=self.build_params(request))
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timed out fetching /r/{request.feed_id}", cause=e) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Network error fetching /r/{request.feed_id}: {e}", cause=e) from e

        if not response.is_success:
            raise ApiError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError("Response is not valid JSON", cause=e, status_code=response.status_code) from e

        return self.parse_listing(payload)

    # -------------------------Parse------------------------- #

    @classmethod
    def parse_listing(cls, payload) -> Page:
        try:
            data = payload["data"]
            children = data["children"]
        except (KeyError, TypeError) as e:
            raise ApiError("Malformed listing payload", cause=e) from e
        if not isinstance(children, list):
            raise ApiError("Malformed listing payload: children is not a list")

        items = tuple(cls.parse_item(child) for child in children)
        return Page(items=items, next_cursor=data.get("after") or None)

    @staticmethod
    def parse_item(child: dict) -> Item:
        try:
            post = child["data"]
            thumbnail = post.get("thumbnail") or None
            if thumbnail and not thumbnail.startswith("http"):
                thumbnail = None

            return Item(
                id=str(post["id"]),
                title=post.get("title") or "",
                author=post.get("author") or "",
                score=int(post.get("score") or 0),
                comment_count=int(post.get("num_comments") or 0),
                created_at=datetime.fromtimestamp(float(post.get("created_utc") or 0), tz=timezone.utc),
                thumbnail_url=thumbnail,
                target_url=post.get("url") or "",
                permalink=f"{PERMALINK_HOST}{post.get('permalink') or ''}",
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ApiError(f"Malformed listing item: {e}", cause=e) from e
