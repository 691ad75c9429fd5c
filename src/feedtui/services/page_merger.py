from typing import Iterable, Sequence

from feedtui.models import Item, MergeMode


def _unseen(items: Iterable[Item], seen: set[str]) -> list[Item]:
    fresh = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        fresh.append(item)
    return fresh


def merge(existing: Sequence[Item], incoming: Sequence[Item], mode: MergeMode) -> list[Item]:
    """Combine a freshly fetched page with the current collection.

    In reset mode the result is ``incoming`` with repeated ids removed (first
    occurrence wins). In append mode the result is ``existing`` followed by the
    items of ``incoming`` whose id is not already present, in their original
    order. Neither input is modified.
    """
    if mode is MergeMode.RESET:
        return _unseen(incoming, set())

    merged = list(existing)
    merged.extend(_unseen(incoming, {item.id for item in existing}))
    return merged
