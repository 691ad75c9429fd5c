"""Tests for ScrollTrigger."""

import pytest

from feedtui.services.scroll_trigger import DEFAULT_THRESHOLD, ScrollGeometry, ScrollTrigger, is_near_bottom


def test_default_threshold():
    assert ScrollTrigger().threshold == DEFAULT_THRESHOLD == 500


def test_near_bottom_boundary():
    # 300 + 700 == 1500 - 500
    assert is_near_bottom(ScrollGeometry(viewport_height=700, scroll_offset=300, content_height=1500))
    assert not is_near_bottom(ScrollGeometry(viewport_height=700, scroll_offset=299, content_height=1500))


def test_custom_threshold():
    trigger = ScrollTrigger(threshold=0)

    assert trigger.check(ScrollGeometry(viewport_height=10, scroll_offset=90, content_height=100))
    assert not trigger.check(ScrollGeometry(viewport_height=10, scroll_offset=89, content_height=100))


def test_short_content_is_near_bottom():
    assert ScrollTrigger(threshold=8).check(ScrollGeometry(viewport_height=20, scroll_offset=0, content_height=5))


def test_negative_threshold_rejected():
    with pytest.raises(ValueError):
        ScrollTrigger(threshold=-1)


def test_subscription_fires_on_every_near_bottom_sample():
    calls = []
    subscription = ScrollTrigger(threshold=2).subscribe(lambda: calls.append(True))

    assert subscription.feed(ScrollGeometry(10, 0, 100)) is False
    assert subscription.feed(ScrollGeometry(10, 90, 100)) is True
    assert subscription.feed(ScrollGeometry(10, 90, 100)) is True

    assert len(calls) == 2


def test_subscription_released_by_context_manager():
    calls = []
    trigger = ScrollTrigger(threshold=0)

    with trigger.subscribe(lambda: calls.append(True)) as subscription:
        subscription.feed(ScrollGeometry(10, 90, 100))

    assert subscription.closed
    assert subscription.feed(ScrollGeometry(10, 90, 100)) is False
    assert len(calls) == 1


def test_close_is_idempotent():
    subscription = ScrollTrigger().subscribe(lambda: None)

    subscription.close()
    subscription.close()

    assert subscription.closed
