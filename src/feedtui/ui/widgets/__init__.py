from .post_list import PostItem, PostList
from .status_bar import StatusBar
from .title_bar import TitleBar

__all__ = ["PostItem", "PostList", "StatusBar", "TitleBar"]
