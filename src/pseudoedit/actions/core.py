"""Result helpers shared by the action modules."""

from __future__ import annotations

from pseudoedit.buffer import BufferDelta
from pseudoedit.editing.base import KeyResult


def changed(
    delta: BufferDelta, *, status: str, message: str | None = None
) -> KeyResult:
    return KeyResult(
        consumed=True, status=status, message=message, changed=True, caret=delta.caret
    )


def unchanged(status: str, *, message: str | None = None) -> KeyResult:
    # Consumed on purpose: the host must not fall back to its own handling.
    return KeyResult(consumed=True, status=status, message=message)


__all__ = ["changed", "unchanged"]
