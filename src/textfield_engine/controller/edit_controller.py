"""Edit controller: focus, pointer hit-testing, and keyboard dispatch for input fields."""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Dict, Iterator, Optional

from textfield_engine.buffer import (
    Clock,
    EditOutcome,
    FieldMirror,
    TextBuffer,
    is_printable,
)
from textfield_engine.keymaps import KeymapRegistry, KeyStroke, load_default_keymaps
from textfield_engine.layout import FixedAdvanceMetrics, GlyphMetrics, TextLayoutCursor
from textfield_engine.runtime import telemetry
from textfield_engine.runtime.settings import EngineSettings

from .base import (
    ActionContext,
    ControllerResult,
    FieldBounds,
    FieldBus,
    KeyEvent,
    PointerFrame,
)
from .field import InputField, InteractionState


class UnknownFieldError(KeyError):
    """Raised when a field id has not been registered with the controller."""

    def __init__(self, field_id: str) -> None:
        super().__init__(f"Unknown field '{field_id}'")
        self.field_id = field_id


class EditController:
    """Owns every input field and the single focus slot.

    Hosts call ``process_frame`` (or ``process_pointer`` per field) once per
    frame with the pointer sample, then forward decoded characters to
    ``handle_char`` and navigation/deletion keys to ``handle_key``. Focus is
    an explicit attribute of the controller, so two controllers never share it.
    """

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        metrics: Optional[GlyphMetrics] = None,
        clock: Optional[Clock] = None,
        bus: Optional[FieldBus] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        load_defaults: bool = True,
    ) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.metrics: GlyphMetrics = metrics or FixedAdvanceMetrics()
        self.clock: Clock = clock or time.monotonic
        self.bus = bus or FieldBus()
        self.logger = telemetry.get_logger("textfield_engine.controller")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="textfield_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self._fields: Dict[str, InputField] = {}
        self._focused_id: Optional[str] = None

    # -- registry -----------------------------------------------------------

    def register_field(
        self,
        field_id: str,
        bounds: FieldBounds,
        *,
        text: str = "",
        capacity: Optional[int] = None,
        scale: Optional[float] = None,
        hint: str = "",
        metrics: Optional[GlyphMetrics] = None,
    ) -> InputField:
        if field_id in self._fields:
            raise ValueError(f"Field '{field_id}' already registered")
        if bounds.padding is None:
            bounds = replace(bounds, padding=self.settings.padding)
        buffer = TextBuffer(
            name=field_id,
            capacity=capacity if capacity is not None else self.settings.capacity,
            clock=self.clock,
        )
        if text:
            buffer.set_text(text)
        layout = TextLayoutCursor(
            scroll_margin=self.settings.scroll_margin,
            glyph_spacing=self.settings.glyph_spacing,
        )
        field = InputField(
            field_id,
            bounds,
            buffer=buffer,
            layout=layout,
            metrics=metrics or self.metrics,
            scale=scale if scale is not None else self.settings.text_scale,
            hint=hint,
            blink_period=self.settings.blink_period,
        )
        field.refresh_layout()
        self._fields[field_id] = field
        return field

    def unregister_field(self, field_id: str) -> InputField:
        field = self.field(field_id)
        if self._focused_id == field_id:
            self.blur()
        del self._fields[field_id]
        return field

    def field(self, field_id: str) -> InputField:
        try:
            return self._fields[field_id]
        except KeyError:
            raise UnknownFieldError(field_id) from None

    def iter_fields(self) -> Iterator[InputField]:
        yield from self._fields.values()

    def state_of(self, field_id: str) -> InteractionState:
        return self.field(field_id).state

    # -- focus --------------------------------------------------------------

    @property
    def focused_id(self) -> Optional[str]:
        return self._focused_id

    @property
    def focused(self) -> Optional[InputField]:
        if self._focused_id is None:
            return None
        return self._fields.get(self._focused_id)

    def focus(self, field_id: str) -> InputField:
        field = self.field(field_id)
        if self._focused_id == field_id:
            return field
        self.blur()
        field.interaction.is_active = True
        field.interaction.is_drag_selecting = False
        field.buffer.reset_blink()
        self._focused_id = field_id
        self.logger.debug(f"focus -> {field_id}")
        telemetry.record_event("field.focus", data={"field": field_id})
        self.bus.emit("field.focus", field_id)
        return field

    def blur(self) -> None:
        previous = self.focused
        self._focused_id = None
        if previous is None:
            return
        previous.interaction.reset()
        self.logger.debug(f"blur -> {previous.field_id}")
        self.bus.emit("field.blur", previous.field_id)

    # -- pointer ------------------------------------------------------------

    def process_frame(self, frame: PointerFrame) -> Dict[str, ControllerResult]:
        """Run the per-frame pointer update for every field, in registration order."""

        return {
            field_id: self.process_pointer(field_id, frame)
            for field_id in list(self._fields)
        }

    def process_pointer(self, field_id: str, frame: PointerFrame) -> ControllerResult:
        field = self.field(field_id)
        field.refresh_layout()
        inside = field.bounds.contains(frame.x, frame.y)
        status = "idle"

        if frame.button_pressed and inside:
            self.focus(field_id)
            field.buffer.move_caret(
                field.index_at_pointer(frame.x), extend_selection=frame.shift
            )
            field.interaction.is_drag_selecting = True
            status = "press"
        elif frame.button_pressed and field.interaction.is_active:
            self.blur()
            status = "blur"
        elif not frame.button_down and field.interaction.is_drag_selecting:
            field.interaction.is_drag_selecting = False
            status = "release"

        if field.interaction.is_active and field.interaction.is_drag_selecting:
            field.buffer.move_caret(field.index_at_pointer(frame.x), extend_selection=True)
            if status == "idle":
                status = "drag"

        field.refresh_layout()
        return ControllerResult(consumed=status != "idle", status=status)

    # -- keyboard -----------------------------------------------------------

    def handle_char(self, char: str) -> ControllerResult:
        field = self.focused
        if field is None:
            return ControllerResult(consumed=False, status="no_focus")
        if not is_printable(char):
            return ControllerResult(
                consumed=False, status="ignored", outcome=EditOutcome.IGNORED
            )

        removed = field.buffer.delete_selection()
        outcome = field.buffer.insert_at(field.buffer.caret, char)
        field.refresh_layout()

        if outcome is EditOutcome.CAPACITY_EXCEEDED:
            self.logger.info(
                f"capacity -> field={field.field_id} capacity={field.buffer.capacity}"
            )
            self.bus.emit(
                "field.capacity",
                {"field": field.field_id, "capacity": field.buffer.capacity},
            )
        if outcome.changed or removed.changed:
            self.bus.emit(
                "field.changed",
                {
                    "field": field.field_id,
                    "label": "insert",
                    "text": field.buffer.text,
                    "caret": field.buffer.caret,
                },
            )
        return ControllerResult(consumed=True, status=outcome.value, outcome=outcome)

    def handle_text(self, text: str) -> list[ControllerResult]:
        """Feed each character of ``text`` through ``handle_char`` in order."""

        return [self.handle_char(char) for char in text]

    def handle_key(self, event: KeyEvent) -> ControllerResult:
        if event.action == "release":
            return ControllerResult(consumed=False, status="release")
        field = self.focused
        if field is None:
            return ControllerResult(consumed=False, status="no_focus")

        match = self.keymap_registry.resolve(KeyStroke(event.key, event.modifiers))
        if match is None:
            return ControllerResult(consumed=False, status="unbound")

        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={
                "binding_id": match.binding.id,
                "action": match.action.telemetry_name,
            },
        ):
            outcome = match.action(ActionContext(input_field=field, bus=self.bus), event)

        field.refresh_layout()
        if isinstance(outcome, ControllerResult):
            return outcome
        return ControllerResult(consumed=True)

    # -- render surface -----------------------------------------------------

    def mirror(self, field_id: str) -> FieldMirror:
        return self.field(field_id).mirror(self.clock())

    def pull_field(self, field_id: str) -> FieldMirror:
        return self.mirror(field_id)

    def push_host_text(self, field_id: str, text: str) -> None:
        field = self.field(field_id)
        if field.buffer.set_text(text).changed:
            field.refresh_layout()
            self.bus.emit(
                "field.changed",
                {
                    "field": field_id,
                    "label": "host",
                    "text": field.buffer.text,
                    "caret": field.buffer.caret,
                },
            )


__all__ = ["EditController", "UnknownFieldError"]
