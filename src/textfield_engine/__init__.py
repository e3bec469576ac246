"""UI-agnostic single-line text-field editing engine."""

from .buffer import EditOutcome, TextBuffer
from .layout import TextLayoutCursor
from .controller import EditController, FieldBounds, KeyEvent, PointerFrame

__all__ = [
    "adapters",
    "buffer",
    "actions",
    "layout",
    "controller",
    "keymaps",
    "runtime",
    "EditController",
    "EditOutcome",
    "FieldBounds",
    "KeyEvent",
    "PointerFrame",
    "TextBuffer",
    "TextLayoutCursor",
]

__version__ = "0.1.0"
