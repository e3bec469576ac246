"""Input events, results, and the event bus shared by the controller and actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from textfield_engine.buffer import EditOutcome
from textfield_engine.runtime.settings import DEFAULT_PADDING

if TYPE_CHECKING:  # pragma: no cover
    from .field import InputField


class LogicalKey(str, Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    HOME = "HOME"
    END = "END"
    BACKSPACE = "BACKSPACE"
    DELETE = "DELETE"


KEY_ACTIONS = ("press", "repeat", "release")


@dataclass(slots=True)
class KeyEvent:
    """Decoded key press identified by a logical key name."""

    key: str
    shift: bool = False
    ctrl: bool = False
    action: str = "press"

    def __post_init__(self) -> None:
        if isinstance(self.key, LogicalKey):
            self.key = self.key.value
        if not self.key:
            raise ValueError("key cannot be empty")
        if self.action not in KEY_ACTIONS:
            raise ValueError(f"Unknown key action '{self.action}'")

    @property
    def modifiers(self) -> Tuple[str, ...]:
        mods = []
        if self.ctrl:
            mods.append("ctrl")
        if self.shift:
            mods.append("shift")
        return tuple(mods)


@dataclass(frozen=True, slots=True)
class PointerFrame:
    """One per-frame pointer sample. ``button_pressed`` is edge-detected."""

    x: float
    y: float
    button_down: bool = False
    button_pressed: bool = False
    shift: bool = False


@dataclass(frozen=True, slots=True)
class FieldBounds:
    """Field box. ``padding=None`` defers to the controller's configured padding."""

    x: float
    y: float
    width: float
    height: float
    padding: Optional[float] = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("bounds cannot have negative size")
        if self.padding is not None and self.padding < 0:
            raise ValueError("padding cannot be negative")

    @property
    def inset(self) -> float:
        return DEFAULT_PADDING if self.padding is None else self.padding

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    @property
    def text_origin_x(self) -> float:
        return self.x + self.inset

    @property
    def viewport_width(self) -> float:
        return max(0.0, self.width - 2 * self.inset)


@dataclass(slots=True)
class ControllerResult:
    """Result returned from every controller entry point."""

    consumed: bool
    status: str = "ok"
    outcome: Optional[EditOutcome] = None
    message: Optional[str] = None


class FieldBus:
    """Minimal event bus so hosts can observe focus and edit signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


@dataclass(slots=True)
class ActionContext:
    """What a key action may touch: the focused field and the bus."""

    input_field: "InputField"
    bus: FieldBus
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = [
    "LogicalKey",
    "KeyEvent",
    "PointerFrame",
    "FieldBounds",
    "ControllerResult",
    "FieldBus",
    "ActionContext",
]
