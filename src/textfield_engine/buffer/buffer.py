"""Single-line text buffer owning content, caret, and selection anchor."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional

from textfield_engine.runtime import telemetry
from textfield_engine.runtime.settings import DEFAULT_CAPACITY

from .state import CaretState, EditOutcome, Selection
from .validation import clamp_index, is_printable

Clock = Callable[[], float]


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    caret: int
    anchor: int
    selection: Optional[Selection]


class TextBuffer:
    """Bounded character sequence with a caret and a selection anchor.

    ``capacity`` counts a reserved terminator slot, so at
    most ``capacity - 1`` characters are stored. Every index argument is
    clamped into ``[0, len(text)]``; nothing here raises for bad positions.
    """

    def __init__(
        self,
        *,
        name: str = "field",
        capacity: int = DEFAULT_CAPACITY,
        clock: Optional[Clock] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.name = name
        self.capacity = capacity
        self.clock: Clock = clock or time.monotonic
        self.state = CaretState(blink_origin=self.clock())
        self.version = 0
        self._chars: list[str] = []

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "field",
        capacity: int = DEFAULT_CAPACITY,
        clock: Optional[Clock] = None,
    ) -> "TextBuffer":
        buffer = cls(name=name, capacity=capacity, clock=clock)
        buffer.set_text(text)
        return buffer

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def caret(self) -> int:
        return self.state.caret

    @property
    def anchor(self) -> int:
        return self.state.anchor

    @property
    def max_length(self) -> int:
        return self.capacity - 1

    @property
    def has_selection(self) -> bool:
        return self.state.has_selection

    @property
    def selection(self) -> Optional[Selection]:
        return self.state.selection

    def __len__(self) -> int:
        return len(self._chars)

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.version,
            text=self.text,
            caret=self.state.caret,
            anchor=self.state.anchor,
            selection=self.state.selection,
        )

    def selected_text(self) -> str:
        selection = self.state.selection
        if selection is None:
            return ""
        start, end = selection
        return "".join(self._chars[start:end])

    def reset_blink(self) -> None:
        self.state.blink_origin = self.clock()

    def insert_at(self, index: int, char: str) -> EditOutcome:
        if not is_printable(char):
            return EditOutcome.IGNORED
        if len(self._chars) >= self.max_length:
            return EditOutcome.CAPACITY_EXCEEDED
        with Transaction(self, "insert"):
            position = clamp_index(index, len(self._chars))
            self._chars.insert(position, char)
            self.state.collapse(position + 1)
        return EditOutcome.APPLIED

    def delete_range(self, start: int, end: int) -> EditOutcome:
        start = clamp_index(start, len(self._chars))
        end = clamp_index(end, len(self._chars))
        if start > end:
            start, end = end, start
        if start == end:
            return EditOutcome.NOOP
        with Transaction(self, "delete_range"):
            del self._chars[start:end]
            self.state.collapse(start)
        return EditOutcome.APPLIED

    def delete_selection(self) -> EditOutcome:
        selection = self.state.selection
        if selection is None:
            return EditOutcome.NOOP
        return self.delete_range(*selection)

    def backspace(self) -> EditOutcome:
        if self.state.has_selection:
            return self.delete_selection()
        caret = clamp_index(self.state.caret, len(self._chars))
        if caret == 0:
            return EditOutcome.NOOP
        with Transaction(self, "backspace"):
            del self._chars[caret - 1]
            self.state.collapse(caret - 1)
        return EditOutcome.APPLIED

    def delete_forward(self) -> EditOutcome:
        if self.state.has_selection:
            return self.delete_selection()
        caret = clamp_index(self.state.caret, len(self._chars))
        if caret >= len(self._chars):
            return EditOutcome.NOOP
        with Transaction(self, "delete_forward"):
            del self._chars[caret]
            self.state.collapse(caret)
        return EditOutcome.APPLIED

    def move_caret(self, index: int, *, extend_selection: bool = False) -> EditOutcome:
        position = clamp_index(index, len(self._chars))
        self.state.caret = position
        if not extend_selection:
            self.state.anchor = position
        self.reset_blink()
        return EditOutcome.APPLIED

    def select_all(self) -> EditOutcome:
        self.state.anchor = 0
        self.state.caret = len(self._chars)
        self.reset_blink()
        return EditOutcome.APPLIED

    def set_text(self, text: str) -> EditOutcome:
        """Replace the content, dropping non-printable characters and overflow."""

        accepted = [char for char in text if is_printable(char)][: self.max_length]
        if accepted == self._chars:
            return EditOutcome.NOOP
        with Transaction(self, "set_text"):
            self._chars = accepted
            self.state.collapse(len(accepted))
        return EditOutcome.APPLIED

    def _reclamp(self) -> None:
        length = len(self._chars)
        self.state.caret = clamp_index(self.state.caret, length)
        self.state.anchor = clamp_index(self.state.anchor, length)


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one content mutation: telemetry span, version bump, re-clamp."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self.buffer.version += 1
                self.buffer._reclamp()
                self.buffer.reset_blink()
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False
