"""Pixel layout of a single line of text and the viewport scroll that tracks the caret."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from textfield_engine.buffer.validation import is_printable
from textfield_engine.runtime.settings import (
    DEFAULT_GLYPH_SPACING,
    DEFAULT_SCROLL_MARGIN,
)

from .metrics import GlyphMetrics


class TextLayoutCursor:
    """Maps between character indices and text-local pixel offsets.

    Advances and prefix offsets are derived data: ``recompute_layout`` rebuilds
    them from scratch and skips the work when content, scale, spacing and
    metrics are unchanged since the last call. ``scroll_offset`` is the only state that
    must persist across frames.
    """

    def __init__(
        self,
        *,
        scroll_margin: float = DEFAULT_SCROLL_MARGIN,
        glyph_spacing: float = DEFAULT_GLYPH_SPACING,
    ) -> None:
        if scroll_margin < 0:
            raise ValueError("scroll_margin cannot be negative")
        self.scroll_margin = scroll_margin
        self.glyph_spacing = glyph_spacing
        self.scroll_offset = 0.0
        self._advances: list[float] = []
        self._offsets: list[float] = [0.0]
        self._cache_key: Optional[Tuple[str, float, float]] = None
        self._cache_metrics: Optional[GlyphMetrics] = None

    @property
    def advances(self) -> Sequence[float]:
        return tuple(self._advances)

    @property
    def offsets(self) -> Sequence[float]:
        """Left edge of every character plus the total width at ``[len]``."""

        return tuple(self._offsets)

    @property
    def length(self) -> int:
        return len(self._advances)

    @property
    def total_width(self) -> float:
        return self._offsets[-1]

    def invalidate(self) -> None:
        self._cache_key = None
        self._cache_metrics = None

    def recompute_layout(
        self, content: str, scale: float, metrics: GlyphMetrics
    ) -> bool:
        """Rebuild advances and offsets. Returns False when the cache was reused."""

        key = (content, float(scale), float(self.glyph_spacing))
        if key == self._cache_key and metrics is self._cache_metrics:
            return False

        advances: list[float] = []
        offsets: list[float] = []
        running = 0.0
        for char in content:
            if is_printable(char):
                width = (metrics.advance(char) + self.glyph_spacing) * scale
            else:
                width = 0.0
            offsets.append(running)
            advances.append(width)
            running += width
        offsets.append(running)

        self._advances = advances
        self._offsets = offsets
        self._cache_key = key
        self._cache_metrics = metrics
        return True

    def pixel_offset_of_index(self, index: int) -> float:
        if index <= 0:
            return 0.0
        if index >= self.length:
            return self.total_width
        return self._offsets[index]

    def index_at_pixel(self, local_x: float) -> int:
        # First glyph whose midpoint lies right of local_x, scanning left to right.
        if local_x <= 0:
            return 0
        if local_x >= self.total_width:
            return self.length
        for index, width in enumerate(self._advances):
            if local_x < self._offsets[index] + width * 0.5:
                return index
        return self.length

    def selection_span(self, start: int, end: int) -> Tuple[float, float]:
        left = self.pixel_offset_of_index(min(start, end))
        right = self.pixel_offset_of_index(max(start, end))
        return (left, right)

    def max_scroll(self, viewport_width: float) -> float:
        return max(0.0, self.total_width - viewport_width)

    def clamp_scroll(self, viewport_width: float) -> float:
        self.scroll_offset = min(
            max(self.scroll_offset, 0.0), self.max_scroll(viewport_width)
        )
        return self.scroll_offset

    def update_scroll_to_keep_caret_visible(
        self, caret_pixel: float, viewport_width: float
    ) -> float:
        margin = self.scroll_margin
        if caret_pixel > self.scroll_offset + viewport_width - margin:
            self.scroll_offset = caret_pixel - viewport_width + margin
        elif caret_pixel < self.scroll_offset + margin:
            self.scroll_offset = max(0.0, caret_pixel - margin)
        return self.clamp_scroll(viewport_width)

    def visible_index_range(self, viewport_width: float) -> Tuple[int, int]:
        """Half-open range of characters at least partly inside the viewport."""

        left = self.scroll_offset
        right = self.scroll_offset + viewport_width
        start = self.length
        for index, width in enumerate(self._advances):
            if self._offsets[index] + width > left:
                start = index
                break
        end = start
        while end < self.length and self._offsets[end] < right:
            end += 1
        return (start, end)


__all__ = ["TextLayoutCursor"]
