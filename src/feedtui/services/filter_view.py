from typing import Sequence

from feedtui.models import Item


def visible(items: Sequence[Item], search_term: str) -> list[Item]:
    """Items whose title or author contains ``search_term``, ignoring case."""
    needle = (search_term or "").casefold()
    if not needle:
        return list(items)
    return [item for item in items if needle in item.title.casefold() or needle in item.author.casefold()]
