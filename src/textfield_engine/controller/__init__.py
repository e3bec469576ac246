"""Interaction state machine binding pointer and keyboard input to fields."""

from .base import (
    ActionContext,
    ControllerResult,
    FieldBounds,
    FieldBus,
    KeyEvent,
    LogicalKey,
    PointerFrame,
)
from .field import FieldInteraction, InputField, InteractionState
from .edit_controller import EditController, UnknownFieldError

__all__ = [
    "ActionContext",
    "ControllerResult",
    "FieldBounds",
    "FieldBus",
    "KeyEvent",
    "LogicalKey",
    "PointerFrame",
    "FieldInteraction",
    "InputField",
    "InteractionState",
    "EditController",
    "UnknownFieldError",
]
