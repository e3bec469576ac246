"""Text buffer, caret/selection state, and render mirrors."""

from .buffer import BufferView, Clock, TextBuffer, Transaction
from .state import CaretState, EditOutcome, Selection
from .sync import FieldMirror, FieldSync
from .validation import clamp_index, is_printable

__all__ = [
    "TextBuffer",
    "BufferView",
    "Clock",
    "Transaction",
    "CaretState",
    "EditOutcome",
    "Selection",
    "FieldMirror",
    "FieldSync",
    "clamp_index",
    "is_printable",
]
