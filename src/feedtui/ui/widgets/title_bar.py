from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Static


class TitleBar(Static):
    """Title bar showing the active feed and a connection indicator"""

    feed_name: str = reactive("")
    connection_error: bool = reactive(False)

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-bar-container"):
            yield Static("reddit", id="title")
            yield Static("", id="feed-name")
            with Horizontal(id="status-container"):
                yield Static("●", id="connected-indicator")

    def watch_feed_name(self, feed_name: str) -> None:
        try:
            self.query_one("#feed-name", Static).update(feed_name)
        except Exception:
            # Not composed yet
            pass

    def watch_connection_error(self, connection_error: bool) -> None:
        try:
            indicator = self.query_one("#connected-indicator", Static)
            indicator.set_class(connection_error, "error")
        except Exception:
            pass
