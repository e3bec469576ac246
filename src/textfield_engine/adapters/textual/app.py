"""Executable Textual app that hosts a couple of engine-driven input fields."""

from __future__ import annotations

import argparse
import os
from dataclasses import replace
from typing import Dict, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use textfield_engine.adapters.textual.app"
    ) from exc

from textfield_engine.buffer import FieldMirror
from textfield_engine.controller import EditController, FieldBounds
from textfield_engine.layout import CellGlyphMetrics
from textfield_engine.runtime import telemetry
from textfield_engine.runtime.settings import EngineSettings

from .controller import TextualFieldAdapter, TextualUIHooks
from .render import field_cells


def create_default_controller(
    *, width: int = 32, capacity: Optional[int] = None
) -> EditController:
    """Two stacked single-cell-high fields laid out in terminal cells."""

    settings = EngineSettings.from_env()
    # one cell of padding and a caret margin of one cell suit a terminal grid
    settings = replace(settings, padding=1.0, scroll_margin=1.0, text_scale=1.0)
    if capacity is not None:
        settings = replace(settings, capacity=capacity)
    controller = EditController(settings=settings, metrics=CellGlyphMetrics())
    controller.register_field(
        "name",
        FieldBounds(x=2, y=1, width=width, height=0),
        hint="Your name...",
    )
    controller.register_field(
        "note",
        FieldBounds(x=2, y=3, width=width, height=0),
        hint="Type a long note to watch it scroll...",
    )
    return controller


def render_field_line(controller: EditController, mirror: FieldMirror) -> Text:
    field = controller.field(mirror.field_id)
    line = Text(" " * int(field.bounds.x))
    for char, style in field_cells(field, mirror):
        line.append(char, style=style)
    return line


class FieldCanvas(Static):
    """Cell canvas; widget-local mouse coordinates double as field coordinates."""

    DEFAULT_CSS = """
    FieldCanvas {
        height: 1fr;
    }
    """

    def __init__(self, controller: EditController, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.controller = controller
        self.adapter: TextualFieldAdapter | None = None
        self._rows: Dict[str, Text] = {}

    def show_field(self, mirror: FieldMirror) -> None:
        self._rows[mirror.field_id] = render_field_line(self.controller, mirror)
        self._redraw()

    def _redraw(self) -> None:
        height = 0
        placed: Dict[int, Text] = {}
        for field in self.controller.iter_fields():
            row = int(field.bounds.y)
            placed[row] = self._rows.get(field.field_id, Text())
            height = max(height, row + 1)
        lines = [placed.get(row, Text()) for row in range(height)]
        self.update(Text("\n").join(lines))

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.adapter:
            self.capture_mouse()
            self.adapter.handle_mouse_down(event.x, event.y, shift=event.shift)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.adapter:
            self.adapter.handle_mouse_move(
                event.x, event.y, button_down=bool(event.button), shift=event.shift
            )

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.adapter:
            self.release_mouse()
            self.adapter.handle_mouse_up(event.x, event.y, shift=event.shift)


class TextFieldApp(App[None]):
    """Minimal Textual UI embedding the text-field engine."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, width: int = 32, capacity: Optional[int] = None) -> None:
        super().__init__()
        self.controller = create_default_controller(width=width, capacity=capacity)
        self.adapter: TextualFieldAdapter | None = None
        self._canvas: FieldCanvas | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("textfield_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._canvas = FieldCanvas(self.controller, id="field-canvas")
        yield self._canvas
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        assert self._canvas is not None
        hooks = TextualUIHooks(
            update_field=self._canvas.show_field,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualFieldAdapter(self.controller, hooks)
        self._canvas.adapter = self.adapter
        self.set_interval(0.1, self.adapter.tick)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        result = self.adapter.handle_textual_key(event.key, character=event.character)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            focused = self.controller.focused_id or "-"
            self._status_widget.update(f"[{focused}] {status}")

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the text-field engine demo.")
    parser.add_argument(
        "--width",
        type=int,
        default=_env_int("TEXTFIELD_ENGINE_DEMO_WIDTH", 32),
        help="Field width in terminal cells (default: 32)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Override the per-field buffer capacity",
    )
    parser.add_argument(
        "--telemetry-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.telemetry_preset:
        telemetry.configure(preset=args.telemetry_preset)
    app = TextFieldApp(width=args.width, capacity=args.capacity)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
