from __future__ import annotations

from typing import Dict, List

from textfield_engine.adapters.textual import TextualFieldAdapter, TextualUIHooks, field_cells
from textfield_engine.buffer import FieldMirror
from textfield_engine.controller import EditController, FieldBounds
from textfield_engine.layout import CellGlyphMetrics
from textfield_engine.runtime.settings import EngineSettings


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_controller(clock: FakeClock | None = None) -> EditController:
    controller = EditController(
        settings=EngineSettings(scroll_margin=1.0, padding=1.0),
        metrics=CellGlyphMetrics(),
        clock=clock or FakeClock(),
    )
    controller.register_field(
        "name", FieldBounds(x=0, y=0, width=12, height=0, padding=1), hint="name"
    )
    controller.register_field(
        "note", FieldBounds(x=0, y=2, width=12, height=0, padding=1)
    )
    return controller


def make_adapter(
    controller: EditController,
) -> tuple[TextualFieldAdapter, Dict[str, FieldMirror], List[str]]:
    mirrors: Dict[str, FieldMirror] = {}
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_field=lambda mirror: mirrors.__setitem__(mirror.field_id, mirror),
        update_status=statuses.append,
    )
    return TextualFieldAdapter(controller, hooks), mirrors, statuses


def test_adapter_pushes_initial_mirrors() -> None:
    controller = make_controller()

    _adapter, mirrors, _statuses = make_adapter(controller)

    assert set(mirrors) == {"name", "note"}
    assert mirrors["name"].shows_hint is True


def test_click_focuses_and_characters_are_typed() -> None:
    controller = make_controller()
    adapter, mirrors, statuses = make_adapter(controller)

    adapter.handle_mouse_down(3, 0)
    adapter.handle_mouse_up(3, 0)
    for char in "hey":
        adapter.handle_textual_key(char, character=char)

    assert controller.focused_id == "name"
    assert mirrors["name"].text == "hey"
    assert mirrors["name"].is_active is True
    assert statuses[-1] == "applied"


def test_shift_arrow_and_ctrl_a_map_to_key_events() -> None:
    controller = make_controller()
    adapter, mirrors, _statuses = make_adapter(controller)
    controller.push_host_text("note", "hello")
    controller.focus("note")

    adapter.handle_textual_key("shift+left")
    assert mirrors["note"].selection == (4, 5)

    adapter.handle_textual_key("ctrl+a")
    assert mirrors["note"].selection == (0, 5)

    adapter.handle_textual_key("backspace")
    assert mirrors["note"].text == ""


def test_unmapped_key_without_character_is_unbound() -> None:
    controller = make_controller()
    adapter, _mirrors, _statuses = make_adapter(controller)
    controller.focus("name")

    result = adapter.handle_textual_key("f5")

    assert result.status == "unbound"
    assert result.consumed is False


def test_capacity_event_updates_status() -> None:
    controller = EditController(
        settings=EngineSettings(capacity=2, padding=1.0),
        metrics=CellGlyphMetrics(),
        clock=FakeClock(),
    )
    controller.register_field("tiny", FieldBounds(x=0, y=0, width=8, height=0, padding=1))
    adapter, _mirrors, statuses = make_adapter(controller)
    controller.focus("tiny")

    adapter.handle_textual_key("a", character="a")
    adapter.handle_textual_key("b", character="b")

    assert "field full" in statuses
    assert controller.field("tiny").buffer.text == "a"


def test_drag_selects_across_cells() -> None:
    controller = make_controller()
    adapter, mirrors, _statuses = make_adapter(controller)
    controller.push_host_text("note", "abcdef")

    adapter.handle_mouse_down(2, 2)
    adapter.handle_mouse_move(5, 2, button_down=True)
    adapter.handle_mouse_up(5, 2)

    assert mirrors["note"].selection == (1, 4)


def test_field_cells_render_text_selection_and_caret() -> None:
    controller = make_controller()
    controller.push_host_text("note", "abcdef")
    controller.focus("note")
    buffer = controller.field("note").buffer
    buffer.move_caret(1)
    buffer.move_caret(3, extend_selection=True)
    field = controller.field("note")

    cells = field_cells(field, controller.mirror("note"))

    assert len(cells) == 12
    assert "".join(char for char, _style in cells) == " abcdef     "
    assert "royal_blue1" in cells[2][1]
    assert "royal_blue1" in cells[3][1]
    assert cells[4][1].endswith("reverse")


def test_field_cells_show_hint_when_idle_and_empty() -> None:
    controller = make_controller()
    field = controller.field("name")

    cells = field_cells(field, controller.mirror("name"))

    assert "".join(char for char, _style in cells[1:5]) == "name"
    assert "grey62" in cells[1][1]


def test_field_cells_scroll_with_long_text() -> None:
    controller = make_controller()
    controller.push_host_text("note", "abcdefghijklmnop")

    cells = field_cells(controller.field("note"), controller.mirror("note"))
    text = "".join(char for char, _style in cells)

    assert text.strip().endswith("p")
    assert "a" not in text
