"""Render-facing snapshot types exchanged with host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from .state import Selection


@dataclass(slots=True)
class FieldMirror:
    """Everything a renderer needs to draw one input box for one frame."""

    field_id: str
    text: str
    caret: int
    selection: Optional[Selection]
    scroll_offset: float
    is_active: bool
    caret_visible: bool
    caret_x: float = 0.0
    selection_span: Optional[Tuple[float, float]] = None
    hint: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def shows_hint(self) -> bool:
        return not self.text and bool(self.hint)


class FieldSync(Protocol):
    """How adapters pull field state out of the engine and push host edits in."""

    def pull_field(self, field_id: str) -> FieldMirror:
        """Return the latest state the host should render for ``field_id``."""
        ...

    def push_host_text(self, field_id: str, text: str) -> None:
        """Replace a field's content from outside the keyboard path."""
        ...
