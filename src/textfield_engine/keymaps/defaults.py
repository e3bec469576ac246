"""Built-in bindings for the navigation and deletion keys."""

from __future__ import annotations

from typing import Iterable, Sequence

from textfield_engine.actions import editing as editing_actions
from textfield_engine.actions import navigation as navigation_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="caret.left",
        handler=navigation_actions.move_left,
        description="Move caret left or collapse selection to its start",
    ),
    ActionRef(
        id="caret.right",
        handler=navigation_actions.move_right,
        description="Move caret right or collapse selection to its end",
    ),
    ActionRef(
        id="caret.home",
        handler=navigation_actions.move_home,
        description="Move caret to the start of the text",
    ),
    ActionRef(
        id="caret.end",
        handler=navigation_actions.move_end,
        description="Move caret to the end of the text",
    ),
    ActionRef(
        id="selection.all",
        handler=navigation_actions.select_all,
        description="Select the whole text",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.backspace,
        description="Delete selection or the character before the caret",
    ),
    ActionRef(
        id="edit.delete",
        handler=editing_actions.delete_forward,
        description="Delete selection or the character at the caret",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(id="key.left", stroke=KeyStroke("LEFT"), action_id="caret.left"),
    Binding(id="key.right", stroke=KeyStroke("RIGHT"), action_id="caret.right"),
    Binding(id="key.home", stroke=KeyStroke("HOME"), action_id="caret.home"),
    Binding(id="key.end", stroke=KeyStroke("END"), action_id="caret.end"),
    Binding(
        id="key.backspace", stroke=KeyStroke("BACKSPACE"), action_id="edit.backspace"
    ),
    Binding(id="key.delete", stroke=KeyStroke("DELETE"), action_id="edit.delete"),
    Binding(
        id="key.select_all",
        stroke=KeyStroke("A", ("ctrl",)),
        action_id="selection.all",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings on ``registry``."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
