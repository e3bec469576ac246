"""Cell-level rendering of a field mirror, independent of any widget toolkit."""

from __future__ import annotations

from typing import List, Tuple

from textfield_engine.buffer import FieldMirror
from textfield_engine.controller import InputField

FIELD_STYLE = "on grey23"
ACTIVE_STYLE = "on dark_red"
SELECTION_STYLE = "on royal_blue1"
HINT_STYLE = "grey62"
CARET_STYLE = "reverse"

Cell = Tuple[str, str]


def field_cells(field: InputField, mirror: FieldMirror) -> List[Cell]:
    """Return one ``(char, style)`` pair per terminal cell of the field box.

    Text is shifted left by the scroll offset and clipped to the viewport;
    the caret may land in the right padding cell when it sits after the last
    character.
    """

    bounds = field.bounds
    width = max(0, int(bounds.width))
    origin = int(bounds.inset)
    viewport = int(bounds.viewport_width)
    box = ACTIVE_STYLE if mirror.is_active else FIELD_STYLE
    chars = [" "] * width
    styles = [box] * width

    if mirror.shows_hint:
        for offset, char in enumerate(mirror.hint[:viewport]):
            chars[origin + offset] = char
            styles[origin + offset] = f"{HINT_STYLE} {box}"
    else:
        start, end = field.layout.visible_index_range(bounds.viewport_width)
        for index in range(start, end):
            column = int(
                field.layout.pixel_offset_of_index(index) - mirror.scroll_offset
            )
            if 0 <= column < viewport:
                chars[origin + column] = mirror.text[index]

    if mirror.selection_span is not None:
        left, right = mirror.selection_span
        first = origin + max(0, int(left - mirror.scroll_offset))
        last = origin + min(viewport, int(right - mirror.scroll_offset))
        for cell in range(first, last):
            styles[cell] = SELECTION_STYLE

    if mirror.caret_visible:
        cell = origin + int(mirror.caret_x - mirror.scroll_offset)
        if 0 <= cell < width:
            styles[cell] = f"{styles[cell]} {CARET_STYLE}"

    return list(zip(chars, styles))


__all__ = ["field_cells", "Cell"]
