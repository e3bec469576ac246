"""Deletion verbs bound to Backspace and Delete."""

from __future__ import annotations

from textfield_engine.buffer import EditOutcome
from textfield_engine.controller.base import ActionContext, ControllerResult, KeyEvent


def _report(context: ActionContext, label: str, outcome: EditOutcome) -> ControllerResult:
    if outcome is not EditOutcome.APPLIED:
        return ControllerResult(consumed=True, status="noop", outcome=outcome)
    buffer = context.input_field.buffer
    context.bus.emit(
        "field.changed",
        {
            "field": context.input_field.field_id,
            "label": label,
            "text": buffer.text,
            "caret": buffer.caret,
        },
    )
    return ControllerResult(consumed=True, status=label, outcome=outcome)


def backspace(context: ActionContext, event: KeyEvent) -> ControllerResult:
    del event
    return _report(context, "backspace", context.input_field.buffer.backspace())


def delete_forward(context: ActionContext, event: KeyEvent) -> ControllerResult:
    del event
    return _report(context, "delete", context.input_field.buffer.delete_forward())


__all__ = ["backspace", "delete_forward"]
