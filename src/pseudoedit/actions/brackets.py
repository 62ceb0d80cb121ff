"""Bracket auto-closing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pseudoedit.editing.base import EditContext, KeyResult
from pseudoedit.lexer import OPEN_TO_CLOSE

from .core import changed

if TYPE_CHECKING:
    from pseudoedit.keymaps.resolver import ResolutionMatch


def close_bracket(context: EditContext, match: ResolutionMatch) -> KeyResult:
    """Insert the typed opener and its closer, caret in between.

    Bindings gate this on ``!has_selection``; with a selection the key falls
    through and plain typing replaces the selected text.
    """

    opener = match.binding.stroke.key
    closer = OPEN_TO_CLOSE[opener]
    buffer = context.buffer
    position = buffer.caret.position
    delta = buffer.replace_range(
        position,
        position,
        opener + closer,
        label="close_bracket",
        caret=position + len(opener),
    )
    return changed(delta, status="bracket_pair", message=opener)


__all__ = ["close_bracket"]
