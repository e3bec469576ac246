"""Glyph metrics and the pixel/index layout cursor."""

from .cursor import TextLayoutCursor
from .metrics import (
    CellGlyphMetrics,
    FixedAdvanceMetrics,
    GlyphMetrics,
    TableGlyphMetrics,
)

__all__ = [
    "TextLayoutCursor",
    "GlyphMetrics",
    "FixedAdvanceMetrics",
    "TableGlyphMetrics",
    "CellGlyphMetrics",
]
