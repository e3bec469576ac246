"""Caret movement verbs bound to the arrow, Home and End keys."""

from __future__ import annotations

from textfield_engine.buffer import EditOutcome
from textfield_engine.controller.base import ActionContext, ControllerResult, KeyEvent


def _move(context: ActionContext, target: int, *, extend: bool) -> ControllerResult:
    buffer = context.input_field.buffer
    before = (buffer.caret, buffer.anchor)
    buffer.move_caret(target, extend_selection=extend)
    if (buffer.caret, buffer.anchor) == before:
        return ControllerResult(consumed=True, status="noop", outcome=EditOutcome.NOOP)
    context.bus.emit(
        "field.caret",
        {
            "field": context.input_field.field_id,
            "caret": buffer.caret,
            "anchor": buffer.anchor,
        },
    )
    return ControllerResult(
        consumed=True, status="caret_moved", outcome=EditOutcome.APPLIED
    )


def move_left(context: ActionContext, event: KeyEvent) -> ControllerResult:
    buffer = context.input_field.buffer
    selection = buffer.selection
    if selection is not None and not event.shift:
        return _move(context, selection[0], extend=False)
    return _move(context, buffer.caret - 1, extend=event.shift)


def move_right(context: ActionContext, event: KeyEvent) -> ControllerResult:
    buffer = context.input_field.buffer
    selection = buffer.selection
    if selection is not None and not event.shift:
        return _move(context, selection[1], extend=False)
    return _move(context, buffer.caret + 1, extend=event.shift)


def move_home(context: ActionContext, event: KeyEvent) -> ControllerResult:
    return _move(context, 0, extend=event.shift)


def move_end(context: ActionContext, event: KeyEvent) -> ControllerResult:
    return _move(context, len(context.input_field.buffer), extend=event.shift)


def select_all(context: ActionContext, event: KeyEvent) -> ControllerResult:
    del event
    buffer = context.input_field.buffer
    if not len(buffer):
        return ControllerResult(consumed=True, status="noop", outcome=EditOutcome.NOOP)
    outcome = buffer.select_all()
    context.bus.emit(
        "field.caret",
        {
            "field": context.input_field.field_id,
            "caret": buffer.caret,
            "anchor": buffer.anchor,
        },
    )
    return ControllerResult(consumed=True, status="select_all", outcome=outcome)


__all__ = ["move_left", "move_right", "move_home", "move_end", "select_all"]
