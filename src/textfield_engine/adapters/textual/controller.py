"""Textual adapter that feeds terminal mouse/key events into an EditController."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from textfield_engine.buffer import FieldMirror
from textfield_engine.controller import (
    ControllerResult,
    EditController,
    KeyEvent,
    LogicalKey,
    PointerFrame,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "left": LogicalKey.LEFT.value,
    "right": LogicalKey.RIGHT.value,
    "home": LogicalKey.HOME.value,
    "end": LogicalKey.END.value,
    "backspace": LogicalKey.BACKSPACE.value,
    "ctrl+h": LogicalKey.BACKSPACE.value,
    "delete": LogicalKey.DELETE.value,
}


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_field: Callable[[FieldMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualFieldAdapter:
    """Turns discrete Textual events into per-frame pointer samples and key events.

    Textual reports pointer changes as events rather than polling, so every
    mouse event becomes one frame: ``button_pressed`` is only true for the
    mouse-down that started it.
    """

    def __init__(self, controller: EditController, hooks: TextualUIHooks) -> None:
        self.controller = controller
        self.hooks = hooks
        self._button_down = False
        self._subscribe_events()
        self.refresh()

    def handle_mouse_down(self, x: float, y: float, *, shift: bool = False) -> None:
        self._button_down = True
        self._run_frame(
            PointerFrame(x=x, y=y, button_down=True, button_pressed=True, shift=shift)
        )

    def handle_mouse_move(
        self, x: float, y: float, *, button_down: bool, shift: bool = False
    ) -> None:
        self._button_down = button_down
        self._run_frame(PointerFrame(x=x, y=y, button_down=button_down, shift=shift))

    def handle_mouse_up(self, x: float, y: float, *, shift: bool = False) -> None:
        self._button_down = False
        self._run_frame(PointerFrame(x=x, y=y, button_down=False, shift=shift))

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> ControllerResult:
        """Dispatch a Textual key name, falling back to character input."""

        self.hooks.log(f"key -> key={key!r} character={character!r}")
        event = self._to_key_event(key)
        if event is not None:
            result = self.controller.handle_key(event)
        elif character is not None and len(character) == 1:
            result = self.controller.handle_char(character)
        else:
            result = ControllerResult(consumed=False, status="unbound")
        self.hooks.log(f"result <- status={result.status} consumed={result.consumed}")
        if result.consumed:
            self.hooks.update_status(result.status)
        self.refresh()
        return result

    def tick(self) -> None:
        """Re-render so the caret blinks without input."""

        self.refresh()

    def refresh(self) -> None:
        for field in self.controller.iter_fields():
            self.hooks.update_field(self.controller.mirror(field.field_id))

    def _run_frame(self, frame: PointerFrame) -> None:
        results = self.controller.process_frame(frame)
        for field_id, result in results.items():
            if result.consumed:
                self.hooks.log(f"pointer -> field={field_id} status={result.status}")
        self.refresh()

    @staticmethod
    def _to_key_event(key: str) -> Optional[KeyEvent]:
        direct = TEXTUAL_KEY_NAMES.get(key)
        if direct is not None:
            return KeyEvent(direct)
        parts = key.split("+")
        base = parts[-1]
        modifiers = set(parts[:-1])
        if base in TEXTUAL_KEY_NAMES and modifiers <= {"shift", "ctrl"}:
            return KeyEvent(
                TEXTUAL_KEY_NAMES[base],
                shift="shift" in modifiers,
                ctrl="ctrl" in modifiers,
            )
        if modifiers == {"ctrl"} and len(base) == 1:
            return KeyEvent(base.upper(), ctrl=True)
        return None

    def _subscribe_events(self) -> None:
        bus = self.controller.bus
        for event in (
            "field.focus",
            "field.blur",
            "field.changed",
            "field.capacity",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)
        if name == "field.capacity":
            self.hooks.update_status("field full")


__all__ = ["TextualFieldAdapter", "TextualUIHooks", "TEXTUAL_KEY_NAMES"]
