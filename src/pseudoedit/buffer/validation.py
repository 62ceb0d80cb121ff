"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import Caret
from .sync import BufferValidationError


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_caret(text: str, caret: Caret) -> Caret:
    ensure_offset(text, caret.start)
    ensure_offset(text, caret.end)
    return caret


def clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))
