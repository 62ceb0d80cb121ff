"""Default editing for keys no binding claims.

This is the behaviour a host text widget would provide on its own: typing,
deletion and caret motion. Shift extends the selection for motion keys.
"""

from __future__ import annotations

from typing import Callable, Dict

from pseudoedit.buffer import Buffer, Caret
from pseudoedit.editing.base import EditContext, KeyInput, KeyResult

from .core import changed, unchanged

Motion = Callable[[Buffer, int], int]


def _left(buffer: Buffer, offset: int) -> int:
    return max(0, offset - 1)


def _right(buffer: Buffer, offset: int) -> int:
    return min(len(buffer.text), offset + 1)


def _home(buffer: Buffer, offset: int) -> int:
    return buffer.line_start(offset)


def _end(buffer: Buffer, offset: int) -> int:
    return buffer.line_end(offset)


def _up(buffer: Buffer, offset: int) -> int:
    line_start = buffer.line_start(offset)
    if line_start == 0:
        return 0
    column = offset - line_start
    previous_start = buffer.line_start(line_start - 1)
    return min(previous_start + column, line_start - 1)


def _down(buffer: Buffer, offset: int) -> int:
    line_end = buffer.line_end(offset)
    if line_end == len(buffer.text):
        return line_end
    column = offset - buffer.line_start(offset)
    return min(line_end + 1 + column, buffer.line_end(line_end + 1))


MOTIONS: Dict[str, Motion] = {
    "LEFT": _left,
    "RIGHT": _right,
    "HOME": _home,
    "END": _end,
    "UP": _up,
    "DOWN": _down,
}


def apply_default(context: EditContext, key: KeyInput) -> KeyResult:
    motion = MOTIONS.get(key.key)
    if motion is not None:
        return _move(context, motion, extend="shift" in _lowered(key.modifiers))

    if key.key in {"BACKSPACE", "DELETE"}:
        if context.config.read_only:
            return unchanged("read_only")
        return _delete(context, forward=key.key == "DELETE")

    text = key.text if key.text is not None else _single_char(key.key)
    if text and text.isprintable() and not _has_command_modifier(key):
        if context.config.read_only:
            return unchanged("read_only")
        return changed(context.buffer.insert_text(text), status="insert")

    return KeyResult(consumed=False, status="miss")


def _move(context: EditContext, motion: Motion, *, extend: bool) -> KeyResult:
    buffer = context.buffer
    caret = buffer.caret
    target = motion(buffer, caret.end)
    anchor = caret.start if extend else target
    buffer.select(anchor, target)
    return KeyResult(consumed=True, status="move", caret=Caret(anchor, target))


def _delete(context: EditContext, *, forward: bool) -> KeyResult:
    buffer = context.buffer
    start, end = buffer.caret.ordered()
    if start == end:
        if forward:
            end = min(len(buffer.text), end + 1)
        else:
            start = max(0, start - 1)
    if start == end:
        return unchanged("delete_noop")
    return changed(buffer.delete_range(start, end), status="delete")


def _single_char(key: str) -> str | None:
    return key if len(key) == 1 else None


def _lowered(modifiers: tuple[str, ...]) -> set[str]:
    return {modifier.lower() for modifier in modifiers}


def _has_command_modifier(key: KeyInput) -> bool:
    return bool(_lowered(key.modifiers) & {"ctrl", "alt", "meta"})


__all__ = ["apply_default", "MOTIONS"]
