"""Tab, Shift+Tab and Enter: indentation-aware edits."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pseudoedit.editing.base import EditContext, KeyResult
from pseudoedit.formatting import leading_whitespace
from pseudoedit.lexer import BLOCK_OPENER_RE

from .core import changed, unchanged

if TYPE_CHECKING:
    from pseudoedit.keymaps.resolver import ResolutionMatch


def insert_indent(context: EditContext, match: ResolutionMatch) -> KeyResult:
    """Insert one indent unit at the caret, replacing any selection."""

    del match
    buffer = context.buffer
    start, end = buffer.caret.ordered()
    delta = buffer.replace_range(
        start, end, context.config.indent_unit, label="insert_indent"
    )
    return changed(delta, status="indent")


def remove_indent(context: EditContext, match: ResolutionMatch) -> KeyResult:
    """Drop one unit from the start of the caret's line.

    Only fires when the text between line start and caret begins with a full
    unit; anything shorter is left alone.
    """

    del match
    buffer = context.buffer
    unit = context.config.indent_unit
    start = buffer.caret.ordered()[0]
    line_start = buffer.line_start(start)
    if not buffer.text[line_start:start].startswith(unit):
        return unchanged("dedent_skipped")
    delta = buffer.replace_range(
        line_start,
        line_start + len(unit),
        "",
        label="remove_indent",
        caret=start - len(unit),
    )
    return changed(delta, status="dedent")


def newline_with_indent(context: EditContext, match: ResolutionMatch) -> KeyResult:
    """Break the line, carrying indentation forward.

    One extra unit is added when the text before the caret ends with a
    block-opening keyword (``do`` / ``then``).
    A selection is kept: the break goes in front of it.
    """

    del match
    buffer = context.buffer
    start = buffer.caret.ordered()[0]
    current = buffer.text[buffer.line_start(start) : start]
    indent = leading_whitespace(current)
    if BLOCK_OPENER_RE.search(current.strip()):
        indent += context.config.indent_unit
    delta = buffer.replace_range(start, start, "\n" + indent, label="newline")
    return changed(delta, status="newline")


__all__ = ["insert_indent", "remove_indent", "newline_with_indent"]
