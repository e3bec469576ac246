from __future__ import annotations

import pytest

from textfield_engine.layout import (
    CellGlyphMetrics,
    FixedAdvanceMetrics,
    TableGlyphMetrics,
    TextLayoutCursor,
)

MONO = FixedAdvanceMetrics(width=10)


def make_layout(text: str, *, scale: float = 1.0, **kwargs) -> TextLayoutCursor:
    layout = TextLayoutCursor(**kwargs)
    layout.recompute_layout(text, scale, MONO)
    return layout


def test_offsets_are_prefix_sums() -> None:
    layout = make_layout("abc")

    assert layout.advances == (10.0, 10.0, 10.0)
    assert layout.offsets == (0.0, 10.0, 20.0, 30.0)
    assert layout.total_width == 30.0


def test_empty_content_has_zero_width() -> None:
    layout = make_layout("")

    assert layout.total_width == 0.0
    assert layout.pixel_offset_of_index(0) == 0.0
    assert layout.index_at_pixel(12.0) == 0


def test_scale_and_spacing_apply_per_glyph() -> None:
    layout = make_layout("ab", scale=2.0, glyph_spacing=1.0)

    assert layout.advances == (22.0, 22.0)
    assert layout.total_width == 44.0


def test_non_printable_characters_have_zero_width() -> None:
    layout = make_layout("a\tb")

    assert layout.advances == (10.0, 0.0, 10.0)
    assert layout.total_width == 20.0


@pytest.mark.parametrize(
    ("index", "expected"),
    [(-1, 0.0), (0, 0.0), (1, 10.0), (2, 20.0), (3, 30.0), (10, 30.0)],
)
def test_pixel_offset_of_index(index: int, expected: float) -> None:
    assert make_layout("abc").pixel_offset_of_index(index) == expected


@pytest.mark.parametrize(
    ("local_x", "expected"),
    [
        (-4.0, 0),
        (0.0, 0),
        (4.9, 0),
        (5.0, 1),
        (14.0, 1),
        (15.0, 2),
        (25.0, 3),
        (29.0, 3),
        (30.0, 3),
        (400.0, 3),
    ],
)
def test_index_at_pixel_uses_first_midpoint_to_the_right(
    local_x: float, expected: int
) -> None:
    assert make_layout("abc").index_at_pixel(local_x) == expected


def test_index_at_pixel_round_trips_through_offsets() -> None:
    layout = TextLayoutCursor()
    layout.recompute_layout("iW.a", 1.0, TableGlyphMetrics({"i": 2, "W": 9, ".": 1}, default=5))

    for index in range(layout.length + 1):
        pixel = layout.pixel_offset_of_index(index)
        hit = layout.index_at_pixel(pixel)
        assert layout.pixel_offset_of_index(hit) == pixel


def test_scroll_advances_to_keep_caret_visible() -> None:
    layout = make_layout("x" * 25)
    assert layout.total_width == 250.0

    scroll = layout.update_scroll_to_keep_caret_visible(240.0, 100.0)

    assert scroll == 150.0
    assert layout.scroll_offset == 150.0


def test_scroll_clamps_when_caret_at_end() -> None:
    layout = make_layout("x" * 25)

    layout.update_scroll_to_keep_caret_visible(250.0, 100.0)

    assert layout.scroll_offset == 150.0


def test_scroll_retreats_with_margin() -> None:
    layout = make_layout("x" * 25)
    layout.update_scroll_to_keep_caret_visible(250.0, 100.0)

    layout.update_scroll_to_keep_caret_visible(100.0, 100.0)
    assert layout.scroll_offset == 90.0

    layout.update_scroll_to_keep_caret_visible(0.0, 100.0)
    assert layout.scroll_offset == 0.0


def test_scroll_untouched_when_caret_comfortably_visible() -> None:
    layout = make_layout("x" * 25)
    layout.scroll_offset = 40.0

    layout.update_scroll_to_keep_caret_visible(100.0, 100.0)

    assert layout.scroll_offset == 40.0


def test_short_text_never_scrolls() -> None:
    layout = make_layout("abc")

    layout.update_scroll_to_keep_caret_visible(30.0, 100.0)

    assert layout.scroll_offset == 0.0


def test_scroll_reclamped_after_text_shrinks() -> None:
    layout = make_layout("x" * 25)
    layout.update_scroll_to_keep_caret_visible(250.0, 100.0)

    layout.recompute_layout("x" * 12, 1.0, MONO)
    layout.update_scroll_to_keep_caret_visible(120.0, 100.0)

    assert layout.scroll_offset == 20.0


def test_recompute_reuses_cache_until_inputs_change() -> None:
    layout = TextLayoutCursor()

    assert layout.recompute_layout("abc", 1.0, MONO) is True
    assert layout.recompute_layout("abc", 1.0, MONO) is False
    assert layout.recompute_layout("abc", 2.0, MONO) is True
    assert layout.recompute_layout("abc", 2.0, FixedAdvanceMetrics(width=3)) is True

    layout.invalidate()
    assert layout.recompute_layout("abc", 2.0, MONO) is True


def test_spacing_change_rebuilds_cached_layout() -> None:
    layout = make_layout("ab")
    assert layout.total_width == 20.0

    layout.glyph_spacing = 2.0

    assert layout.recompute_layout("ab", 1.0, MONO) is True
    assert layout.total_width == 24.0


def test_selection_span_is_ordered() -> None:
    layout = make_layout("Hello")

    assert layout.selection_span(4, 1) == (10.0, 40.0)


def test_visible_index_range_follows_scroll() -> None:
    layout = make_layout("x" * 25)
    layout.update_scroll_to_keep_caret_visible(250.0, 100.0)

    assert layout.visible_index_range(100.0) == (15, 25)


def test_visible_index_range_includes_partial_glyphs() -> None:
    layout = make_layout("x" * 25)
    layout.scroll_offset = 35.0

    assert layout.visible_index_range(100.0) == (3, 14)


def test_cell_metrics_use_terminal_columns() -> None:
    metrics = CellGlyphMetrics(cell_width=8)

    assert metrics.advance("a") == 8
    assert metrics.advance("\n") == 0


def test_table_metrics_default_and_non_printable() -> None:
    metrics = TableGlyphMetrics({"a": 4}, default=6)

    assert metrics.advance("a") == 4.0
    assert metrics.advance("b") == 6.0
    assert metrics.advance("\x01") == 0.0


def test_negative_margin_rejected() -> None:
    with pytest.raises(ValueError):
        TextLayoutCursor(scroll_margin=-1)
