"""Main feedtui application."""

from textual.app import App
from textual.binding import Binding

from feedtui.config import FeedConfig
from feedtui.gateways.reddit import RedditListingSource
from feedtui.models import ListingSource
from feedtui.ui.screens.main_screen import MainScreen
from feedtui.ui.themes import THEMES


class FeedTUI(App):
    """Feed Terminal UI application."""

    TITLE = "Feed Browser"
    CSS_PATH = "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, config: FeedConfig | None = None, source: ListingSource | None = None, **kwargs):
        """Initialize the feedtui app.

        Args:
            config: Viewer configuration. Defaults are used when omitted.
            source: Listing source to page through. A Reddit source built from
                the configuration is used when omitted and closed on exit.
        """
        super().__init__(**kwargs)
        self.feed_config = config or FeedConfig()
        self._owns_listing_source = source is None
        self.listing_source = source or RedditListingSource(
            base_url=self.feed_config.base_url,
            timeout=self.feed_config.request_timeout,
            user_agent=self.feed_config.user_agent,
        )

    def register_custom_themes(self) -> None:
        for theme in THEMES:
            self.register_theme(theme)

    def on_mount(self) -> None:
        """Called when app starts."""
        self.register_custom_themes()
        self.theme = self.feed_config.theme
        self.push_screen(MainScreen(self.listing_source, self.feed_config))

    async def on_unmount(self) -> None:
        if self._owns_listing_source:
            await self.listing_source.aclose()
