"""Glyph-metrics providers mapping a character to an unscaled advance width."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Protocol

from wcwidth import wcwidth

from textfield_engine.buffer.validation import is_printable


class GlyphMetrics(Protocol):
    def advance(self, char: str) -> float:
        """Unscaled horizontal advance of ``char``."""
        ...


@dataclass(frozen=True, slots=True)
class FixedAdvanceMetrics:
    """Every printable glyph occupies the same width."""

    width: float = 6.0

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError("width cannot be negative")

    def advance(self, char: str) -> float:
        return self.width if is_printable(char) else 0.0


@dataclass(frozen=True)
class TableGlyphMetrics:
    """Per-character advances; characters missing from ``table`` use ``default``."""

    table: Mapping[str, float] = field(default_factory=dict)
    default: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", MappingProxyType(dict(self.table)))

    def advance(self, char: str) -> float:
        if not is_printable(char):
            return 0.0
        return float(self.table.get(char, self.default))


@dataclass(frozen=True, slots=True)
class CellGlyphMetrics:
    """Terminal cells: ``wcwidth`` columns times ``cell_width``."""

    cell_width: float = 1.0

    def advance(self, char: str) -> float:
        if not is_printable(char):
            return 0.0
        columns = wcwidth(char)
        return max(columns, 0) * self.cell_width


__all__ = [
    "GlyphMetrics",
    "FixedAdvanceMetrics",
    "TableGlyphMetrics",
    "CellGlyphMetrics",
]
