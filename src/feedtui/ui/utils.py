from datetime import datetime

from feedtui.models import Item

FEED_PREFIXES = ("/r/", "r/")


def normalize_feed_name(value: str) -> str:
    """Normalize user input into a bare feed name.

    Args:
        value: Raw text typed by the user (e.g. " r/python ")

    Returns:
        Feed name without surrounding whitespace, prefixes or slashes
    """
    name = (value or "").strip()
    for prefix in FEED_PREFIXES:
        if name.lower().startswith(prefix):
            name = name[len(prefix) :]
            break
    return name.strip("/ ")


def format_date(created_at: datetime) -> str:
    """Format a post timestamp as a local calendar date."""
    return created_at.astimezone().strftime("%Y-%m-%d")


def format_score(score: int) -> str:
    """Format a score compactly.

    Args:
        score: Post score

    Returns:
        Formatted score (e.g. "987", "12.3k")
    """
    if abs(score) < 1000:
        return str(score)
    if abs(score) < 1_000_000:
        return f"{score / 1000:.1f}k"
    return f"{score / 1_000_000:.1f}M"


def format_comment_count(count: int) -> str:
    return "1 comment" if count == 1 else f"{count} comments"


def format_post_meta(item: Item) -> str:
    return f"Posted by u/{item.author} · {format_date(item.created_at)}"


def format_status(visible_count: int, total_count: int, page_count: int) -> str:
    """Format the status line shown under the post list."""
    return f"Displaying {visible_count} of {total_count} posts | Page {page_count}"
