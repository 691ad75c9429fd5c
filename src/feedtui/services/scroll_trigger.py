"""Near-bottom detection for infinite scrolling."""

from dataclasses import dataclass
from typing import Callable

from loguru import logger

DEFAULT_THRESHOLD = 500


@dataclass(frozen=True)
class ScrollGeometry:
    viewport_height: float
    scroll_offset: float
    content_height: float


def is_near_bottom(geometry: ScrollGeometry, threshold: float = DEFAULT_THRESHOLD) -> bool:
    return geometry.scroll_offset + geometry.viewport_height >= geometry.content_height - threshold


class GeometrySubscription:
    """Forwards near-bottom signals to a callback until closed."""

    def __init__(self, trigger: "ScrollTrigger", on_near_bottom: Callable[[], None]):
        self._trigger = trigger
        self._on_near_bottom = on_near_bottom
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, geometry: ScrollGeometry) -> bool:
        """Evaluate a geometry sample and fire the callback when near the bottom.

        The signal is level-triggered: every sample near the bottom fires again.
        Returns whether the callback fired.
        """
        if self._closed:
            return False
        if not self._trigger.check(geometry):
            return False
        self._on_near_bottom()
        return True

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.debug("Scroll subscription released")

    def __enter__(self) -> "GeometrySubscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class ScrollTrigger:
    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        if threshold < 0:
            raise ValueError("Scroll threshold must not be negative")
        self.threshold = threshold

    def check(self, geometry: ScrollGeometry) -> bool:
        return is_near_bottom(geometry, self.threshold)

    def subscribe(self, on_near_bottom: Callable[[], None]) -> GeometrySubscription:
        return GeometrySubscription(self, on_near_bottom)
