"""Per-field state: buffer, layout, geometry, and interaction flags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from textfield_engine.buffer import FieldMirror, TextBuffer
from textfield_engine.layout import GlyphMetrics, TextLayoutCursor
from textfield_engine.runtime.settings import DEFAULT_BLINK_PERIOD

from .base import FieldBounds


class InteractionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ACTIVE_DRAGGING = "active_dragging"


@dataclass(slots=True)
class FieldInteraction:
    is_active: bool = False
    is_drag_selecting: bool = False

    @property
    def state(self) -> InteractionState:
        if not self.is_active:
            return InteractionState.IDLE
        if self.is_drag_selecting:
            return InteractionState.ACTIVE_DRAGGING
        return InteractionState.ACTIVE

    def reset(self) -> None:
        self.is_active = False
        self.is_drag_selecting = False


class InputField:
    """One input box. The buffer and scroll offset persist across frames."""

    def __init__(
        self,
        field_id: str,
        bounds: FieldBounds,
        *,
        buffer: TextBuffer,
        layout: TextLayoutCursor,
        metrics: GlyphMetrics,
        scale: float = 1.0,
        hint: str = "",
        blink_period: float = DEFAULT_BLINK_PERIOD,
    ) -> None:
        if scale < 0:
            raise ValueError("scale cannot be negative")
        self.field_id = field_id
        self.bounds = bounds
        self.buffer = buffer
        self.layout = layout
        self.metrics = metrics
        self.scale = scale
        self.hint = hint
        self.blink_period = blink_period
        self.interaction = FieldInteraction()

    @property
    def state(self) -> InteractionState:
        return self.interaction.state

    def text_local_x(self, pointer_x: float) -> float:
        return pointer_x - self.bounds.text_origin_x + self.layout.scroll_offset

    def index_at_pointer(self, pointer_x: float) -> int:
        return self.layout.index_at_pixel(self.text_local_x(pointer_x))

    def refresh_layout(self) -> float:
        """Rebuild glyph offsets and scroll the caret into view. Returns the scroll."""

        self.layout.recompute_layout(self.buffer.text, self.scale, self.metrics)
        caret_px = self.layout.pixel_offset_of_index(self.buffer.caret)
        return self.layout.update_scroll_to_keep_caret_visible(
            caret_px, self.bounds.viewport_width
        )

    def caret_visible(self, now: float) -> bool:
        if not self.interaction.is_active:
            return False
        elapsed = now - self.buffer.state.blink_origin
        return (elapsed % self.blink_period) < self.blink_period / 2

    def mirror(self, now: float) -> FieldMirror:
        selection = self.buffer.selection
        span = None
        if selection is not None and self.interaction.is_active:
            span = self.layout.selection_span(*selection)
        return FieldMirror(
            field_id=self.field_id,
            text=self.buffer.text,
            caret=self.buffer.caret,
            selection=selection,
            scroll_offset=self.layout.scroll_offset,
            is_active=self.interaction.is_active,
            caret_visible=self.caret_visible(now),
            caret_x=self.layout.pixel_offset_of_index(self.buffer.caret),
            selection_span=span,
            hint=self.hint,
            attributes={"state": self.state.value},
        )


__all__ = ["InputField", "FieldInteraction", "InteractionState"]
