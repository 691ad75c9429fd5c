"""Status bar widget summarizing the loaded feed."""

from textual.widgets import Static

from feedtui.models import FeedSnapshot
from feedtui.ui.utils import format_status


class StatusBar(Static):
    """Widget for displaying how many posts are shown and loaded."""

    def __init__(self, **kwargs):
        self._text = format_status(0, 0, 0)
        super().__init__(self._text, **kwargs)

    def show_snapshot(self, snapshot: FeedSnapshot) -> None:
        """Update the status line from a feed snapshot."""
        self._text = format_status(len(snapshot.visible_items), snapshot.total_count, snapshot.page_count)
        self.update(self._text)

    def get_text(self) -> str:
        return self._text
