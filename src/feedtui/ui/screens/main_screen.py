import webbrowser

from loguru import logger
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Footer, Input, Select

from feedtui.config import FeedConfig
from feedtui.models import ErrorInfo, FeedContext, FeedSnapshot, ListingSource, SortMode
from feedtui.services.fetch_coordinator import FetchCoordinator
from feedtui.ui.constants import FETCH_WORKER_GROUP, FILTER_DEBOUNCE_MS
from feedtui.ui.utils import normalize_feed_name
from feedtui.ui.widgets.post_list import PostList
from feedtui.ui.widgets.status_bar import StatusBar
from feedtui.ui.widgets.title_bar import TitleBar

SORT_OPTIONS = [(mode.value.capitalize(), mode) for mode in SortMode]


class MainScreen(Screen):
    """Main screen displaying a single paginated feed."""

    BINDINGS = [
        Binding("q", "app.quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("slash", "focus_search", "Search"),
        Binding("o", "open_permalink", "Open post"),
        Binding("l", "open_link", "Open link"),
        Binding("escape", "focus_list", "Posts", show=False),
    ]

    def __init__(self, source: ListingSource, config: FeedConfig, **kwargs):
        super().__init__(**kwargs)
        self._config = config
        self._feed_context = FeedContext(config.feed_id, config.sort)
        self._search_timer: Timer | None = None
        self._pending_term = ""
        self._last_error: ErrorInfo | None = None
        self.coordinator = FetchCoordinator(source, page_size=config.page_size, on_change=self._on_feed_changed)

    def compose(self) -> ComposeResult:
        """Create the layout for the main screen."""
        with Container(id="main-container"):
            yield TitleBar(id="title-bar")
            with Horizontal(id="controls"):
                yield Input(placeholder="Search posts...", id="search-input")
                yield Input(placeholder="Change feed (press Enter)", id="feed-input")
                yield Select(SORT_OPTIONS, value=self._feed_context.sort_mode, allow_blank=False, id="sort-select")
            yield PostList(scroll_threshold=self._config.scroll_threshold, id="post-list")
            yield StatusBar(id="status-bar")
            yield Footer(id="main-footer", show_command_palette=False)

    def on_mount(self) -> None:
        """Load the initial feed."""
        self.query_one("#title-bar", TitleBar).feed_name = str(self._feed_context)
        self.load_feed(self._feed_context)
        self.query_one("#post-list", PostList).focus_list()

    def on_unmount(self) -> None:
        timer = self._search_timer
        self._search_timer = None
        if timer is not None:
            timer.stop()

    @property
    def feed_context(self) -> FeedContext:
        return self._feed_context

    # Feed control
    def load_feed(self, context: FeedContext) -> None:
        """Switch to ``context`` and start loading it from the first page."""
        self._feed_context = context
        self.run_worker(self.coordinator.request_reset(context), group=FETCH_WORKER_GROUP, exit_on_error=False)

    def load_more(self) -> None:
        self.run_worker(self.coordinator.request_more(), group=FETCH_WORKER_GROUP, exit_on_error=False)

    def _on_feed_changed(self, snapshot: FeedSnapshot) -> None:
        """Push a new snapshot into the widgets."""
        self.query_one("#post-list", PostList).show_snapshot(snapshot)
        self.query_one("#status-bar", StatusBar).show_snapshot(snapshot)

        title_bar = self.query_one("#title-bar", TitleBar)
        if snapshot.context is not None:
            title_bar.feed_name = str(snapshot.context)
        title_bar.connection_error = snapshot.error is not None

        if snapshot.error is not None and snapshot.error is not self._last_error and snapshot.total_count > 0:
            self.notify(f"Error loading posts: {snapshot.error.message}", severity="error")
        self._last_error = snapshot.error

    # Event handlers
    def on_post_list_near_bottom(self, message: PostList.NearBottom) -> None:
        self.load_more()

    def on_post_list_retry_requested(self, message: PostList.RetryRequested) -> None:
        self.action_refresh()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Debounce search input before filtering."""
        if event.input.id != "search-input":
            return
        self._pending_term = event.value
        old_timer = self._search_timer
        self._search_timer = None
        if old_timer is not None:
            old_timer.stop()
        self._search_timer = self.set_timer(FILTER_DEBOUNCE_MS / 1000, self._debounced_search)

    def _debounced_search(self) -> None:
        self._search_timer = None
        self.coordinator.set_search_term(self._pending_term)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self._pending_term = event.value
            timer = self._search_timer
            self._search_timer = None
            if timer is not None:
                timer.stop()
            self.coordinator.set_search_term(self._pending_term)
            self.query_one("#post-list", PostList).focus_list()
        elif event.input.id == "feed-input":
            feed_name = normalize_feed_name(event.value)
            if not feed_name:
                return
            event.input.value = ""
            logger.info(f"Switching feed to /r/{feed_name}")
            self.load_feed(FeedContext(feed_name, self._feed_context.sort_mode))
            self.query_one("#post-list", PostList).focus_list()

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "sort-select" or event.value == Select.BLANK:
            return
        sort_mode = SortMode(event.value)
        if sort_mode == self._feed_context.sort_mode:
            return
        self.load_feed(FeedContext(self._feed_context.feed_id, sort_mode))

    # Actions
    def action_refresh(self) -> None:
        """Reload the current feed from the first page"""
        self.load_feed(self._feed_context)

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_focus_list(self) -> None:
        self.query_one("#post-list", PostList).focus_list()

    def action_open_permalink(self) -> None:
        item = self.query_one("#post-list", PostList).get_highlighted_item()
        if item is None:
            self.notify("No post selected", severity="warning")
            return
        self._open_url(item.permalink)

    def action_open_link(self) -> None:
        item = self.query_one("#post-list", PostList).get_highlighted_item()
        if item is None or not item.target_url:
            self.notify("No link to open", severity="warning")
            return
        self._open_url(item.target_url)

    def _open_url(self, url: str) -> None:
        logger.info(f"Opening {url}")
        if not webbrowser.open(url):
            self.notify(f"Could not open {url}", severity="error")
