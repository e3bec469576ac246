"""Caret, selection, and edit outcome types for text buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Selection = Tuple[int, int]  # normalized half-open range [start, end)


class EditOutcome(str, Enum):
    """What a buffer operation did. None of these is an error."""

    APPLIED = "applied"
    NOOP = "noop"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    IGNORED = "ignored"

    @property
    def changed(self) -> bool:
        return self is EditOutcome.APPLIED


@dataclass(slots=True)
class CaretState:
    """Caret plus selection anchor. Stored unnormalized so drag direction survives."""

    caret: int = 0
    anchor: int = 0
    blink_origin: float = 0.0

    @property
    def has_selection(self) -> bool:
        return self.caret != self.anchor

    @property
    def selection(self) -> Optional[Selection]:
        if self.caret == self.anchor:
            return None
        return (min(self.anchor, self.caret), max(self.anchor, self.caret))

    def collapse(self, index: int) -> None:
        self.caret = index
        self.anchor = index
