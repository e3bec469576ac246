"""Editing verbs invoked through key bindings."""

from .editing import backspace, delete_forward
from .navigation import move_end, move_home, move_left, move_right, select_all

__all__ = [
    "move_left",
    "move_right",
    "move_home",
    "move_end",
    "select_all",
    "backspace",
    "delete_forward",
]
