"""Adapter boundary types for handing buffer state to host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import Caret


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    caret: Caret
    version: int
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when a caret offset falls outside the buffer text."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset
