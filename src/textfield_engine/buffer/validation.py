"""Clamp and character checks shared across buffer and layout code."""

from __future__ import annotations

PRINTABLE_FIRST = 0x20
PRINTABLE_LAST = 0x7E


def clamp_index(index: int, length: int) -> int:
    return max(0, min(int(index), length))


def is_printable(char: str) -> bool:
    """True for a single printable ASCII character (space through tilde)."""

    if not isinstance(char, str) or len(char) != 1:
        return False
    return PRINTABLE_FIRST <= ord(char) <= PRINTABLE_LAST
