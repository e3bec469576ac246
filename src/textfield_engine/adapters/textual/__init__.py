"""Textual host adapter for the text-field engine."""

from .controller import TEXTUAL_KEY_NAMES, TextualFieldAdapter, TextualUIHooks
from .render import field_cells

__all__ = ["TextualFieldAdapter", "TextualUIHooks", "TEXTUAL_KEY_NAMES", "field_cells"]
