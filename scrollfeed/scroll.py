"""
Scroll-proximity detection.

Pure functions of the viewport geometry; safe to evaluate on every sampled
scroll update.
"""

from typing import NamedTuple

from .config import DEFAULT_SCROLL_BUFFER


class ScrollMetrics(NamedTuple):
    """One sample of scroll geometry, all in the same distance unit."""

    offset: float
    viewport_size: float
    content_size: float

    def validate(self) -> None:
        if self.viewport_size < 0 or self.content_size < 0:
            raise ValueError(
                f"Sizes must be non-negative (viewport={self.viewport_size}, "
                f"content={self.content_size})"
            )

    @property
    def distance_to_end(self) -> float:
        """Remaining distance between the bottom of the viewport and the end of the content."""
        return self.content_size - (self.offset + self.viewport_size)

    def is_near_end(self, buffer: float = DEFAULT_SCROLL_BUFFER) -> bool:
        return self.offset + self.viewport_size >= self.content_size - buffer


def detect(
    offset: float,
    viewport_size: float,
    content_size: float,
    has_more: bool,
    is_loading: bool,
    buffer: float = DEFAULT_SCROLL_BUFFER,
) -> bool:
    """
    Decide whether the next page should be requested.

    Returns True iff the viewport reaches within ``buffer`` of the end of the
    content, more data exists and no request is in flight.
    """
    metrics = ScrollMetrics(offset, viewport_size, content_size)
    metrics.validate()
    return metrics.is_near_end(buffer) and has_more and not is_loading
