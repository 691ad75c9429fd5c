from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Button, Label, ListItem, ListView, LoadingIndicator, Static

from feedtui.models import FeedSnapshot, Item
from feedtui.services.scroll_trigger import GeometrySubscription, ScrollGeometry, ScrollTrigger
from feedtui.ui.constants import SCROLL_THRESHOLD_LINES
from feedtui.ui.utils import format_comment_count, format_post_meta, format_score

EMPTY_MESSAGE = "No posts found. Try a different search term."
LOADING_MORE_MESSAGE = "Loading more posts..."
NO_MORE_MESSAGE = "No more posts to load."


class PostItem(ListItem):
    """Individual post widget"""

    def __init__(self, item: Item):
        super().__init__()
        self._item = item

    def compose(self) -> ComposeResult:
        with Horizontal(classes="post-card"):
            yield Label(format_score(self._item.score), classes="post-score")
            with Vertical(classes="post-content"):
                yield Label(format_post_meta(self._item), classes="post-meta", markup=False)
                yield Label(self._item.title, classes="post-title", markup=False)
                yield Label(format_comment_count(self._item.comment_count), classes="post-comments")

    @property
    def item(self) -> Item:
        return self._item


class PostList(Static):
    """Scrollable list of posts with loading, empty and error states."""

    is_loading: bool = reactive(False)

    class NearBottom(Message):
        """Posted when the list is scrolled close to its end."""

    class RetryRequested(Message):
        """Posted when the user asks to retry after an error."""

    def __init__(self, scroll_threshold: int = SCROLL_THRESHOLD_LINES, **kwargs):
        super().__init__(**kwargs)
        self._trigger = ScrollTrigger(threshold=scroll_threshold)
        self._subscription: GeometrySubscription | None = None
        self._rendered_ids: list[str] = []
        self._snapshot: FeedSnapshot | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="post-list-container"):
            yield LoadingIndicator(id="post-loading")
            with Vertical(id="post-error"):
                yield Static("Error Loading Content", id="post-error-title")
                yield Static("", id="post-error-message", markup=False)
                yield Button("Retry", variant="error", id="retry-btn")
            yield Static(EMPTY_MESSAGE, id="post-empty")
            yield ListView(id="post-list-view")
            yield Static("", id="post-list-footer")

    def on_mount(self) -> None:
        """Subscribe to scroll changes of the list view."""
        self._subscription = self._trigger.subscribe(self._on_near_bottom)
        list_view = self.query_one("#post-list-view", ListView)
        self.watch(list_view, "scroll_y", self._on_scroll_changed, init=False)
        self._set_panels(loading=True, error=False, empty=False)

    def on_unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "retry-btn":
            event.stop()
            self.post_message(self.RetryRequested())

    def watch_is_loading(self, is_loading: bool) -> None:
        """React to first-load state changes."""
        try:
            self.query_one("#post-loading", LoadingIndicator).display = is_loading
        except Exception:
            # Widgets not ready yet, silently ignore
            pass

    # Public methods
    def show_snapshot(self, snapshot: FeedSnapshot) -> None:
        """Render a feed snapshot."""
        previous = self._snapshot
        self._snapshot = snapshot

        first_load = snapshot.is_loading and snapshot.total_count == 0
        show_error = snapshot.error is not None and snapshot.total_count == 0 and not snapshot.is_loading
        show_empty = not snapshot.is_loading and not show_error and not snapshot.visible_items

        self.is_loading = first_load
        self._set_panels(loading=first_load, error=show_error, empty=show_empty)
        if show_error:
            self.query_one("#post-error-message", Static).update(snapshot.error.message)

        self._render_items(snapshot.visible_items)
        self.query_one("#post-list-footer", Static).update(self._footer_text(snapshot))

        # A page that does not fill the viewport produces no scroll event
        grew = previous is None or snapshot.total_count > previous.total_count
        if grew and not snapshot.is_loading and not snapshot.search_term:
            self.call_after_refresh(self.check_geometry)

    def check_geometry(self) -> bool:
        """Feed the current scroll geometry to the near-bottom subscription."""
        if self._subscription is None:
            return False
        list_view = self.query_one("#post-list-view", ListView)
        if not list_view.display or not self._rendered_ids:
            return False
        geometry = ScrollGeometry(
            viewport_height=list_view.size.height,
            scroll_offset=list_view.scroll_y,
            content_height=list_view.virtual_size.height,
        )
        return self._subscription.feed(geometry)

    def get_highlighted_item(self) -> Item | None:
        """Get the post under the list cursor."""
        try:
            list_view = self.query_one("#post-list-view", ListView)
        except Exception:
            return None
        child = list_view.highlighted_child
        if isinstance(child, PostItem):
            return child.item
        return None

    def focus_list(self) -> None:
        """Focus the post list view"""
        try:
            list_view = self.query_one("#post-list-view", ListView)
            list_view.focus()
            if list_view.index is None and len(list_view.children) > 0:
                list_view.index = 0
        except Exception:
            super().focus()

    @property
    def rendered_ids(self) -> list[str]:
        return list(self._rendered_ids)

    # Private methods
    def _on_scroll_changed(self, _scroll_y: float) -> None:
        self.check_geometry()

    def _on_near_bottom(self) -> None:
        self.post_message(self.NearBottom())

    def _set_panels(self, *, loading: bool, error: bool, empty: bool) -> None:
        self.query_one("#post-loading", LoadingIndicator).display = loading
        self.query_one("#post-error", Vertical).display = error
        self.query_one("#post-empty", Static).display = empty
        self.query_one("#post-list-view", ListView).display = not (loading or error or empty)

    def _render_items(self, items: tuple[Item, ...]) -> None:
        """Append new posts when the visible list only grew, otherwise rebuild it."""
        ids = [item.id for item in items]
        if ids == self._rendered_ids:
            return

        list_view = self.query_one("#post-list-view", ListView)
        rendered = len(self._rendered_ids)
        if ids[:rendered] == self._rendered_ids:
            list_view.extend(PostItem(item) for item in items[rendered:])
        else:
            list_view.clear()
            list_view.extend(PostItem(item) for item in items)
            if items:
                self.call_after_refresh(self._highlight_first)
        self._rendered_ids = ids

    def _highlight_first(self) -> None:
        list_view = self.query_one("#post-list-view", ListView)
        if len(list_view.children) > 0:
            list_view.index = 0

    @staticmethod
    def _footer_text(snapshot: FeedSnapshot) -> str:
        if snapshot.total_count == 0:
            return ""
        if snapshot.is_loading:
            return LOADING_MORE_MESSAGE
        if not snapshot.has_more:
            return NO_MORE_MESSAGE
        return ""
