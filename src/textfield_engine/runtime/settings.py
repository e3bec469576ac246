"""Environment-driven defaults shared by buffers, layouts and the controller."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "TEXTFIELD_ENGINE_"

DEFAULT_CAPACITY = 256
DEFAULT_SCROLL_MARGIN = 10.0
DEFAULT_PADDING = 5.0
DEFAULT_TEXT_SCALE = 1.0
DEFAULT_GLYPH_SPACING = 0.0
DEFAULT_BLINK_PERIOD = 1.0


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_float(env: Mapping[str, str], key: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables for a field. ``capacity`` counts the reserved terminator slot."""

    capacity: int = DEFAULT_CAPACITY
    scroll_margin: float = DEFAULT_SCROLL_MARGIN
    padding: float = DEFAULT_PADDING
    text_scale: float = DEFAULT_TEXT_SCALE
    glyph_spacing: float = DEFAULT_GLYPH_SPACING
    blink_period: float = DEFAULT_BLINK_PERIOD

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1")
        if self.scroll_margin < 0:
            raise ValueError("scroll_margin cannot be negative")
        if self.padding < 0:
            raise ValueError("padding cannot be negative")
        if self.text_scale < 0:
            raise ValueError("text_scale cannot be negative")
        if self.blink_period <= 0:
            raise ValueError("blink_period must be positive")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        source = os.environ if env is None else env
        try:
            return cls(
                capacity=_env_int(source, "CAPACITY", DEFAULT_CAPACITY),
                scroll_margin=_env_float(
                    source, "SCROLL_MARGIN", DEFAULT_SCROLL_MARGIN
                ),
                padding=_env_float(source, "PADDING", DEFAULT_PADDING),
                text_scale=_env_float(source, "TEXT_SCALE", DEFAULT_TEXT_SCALE),
                glyph_spacing=_env_float(
                    source, "GLYPH_SPACING", DEFAULT_GLYPH_SPACING
                ),
                blink_period=_env_float(source, "BLINK_PERIOD", DEFAULT_BLINK_PERIOD),
            )
        except ValueError:
            return cls()


__all__ = ["EngineSettings", "ENV_PREFIX"]
