"""Key-triggered text mutations and the default editing fallback."""

from .brackets import close_bracket
from .document import (
    format_document,
    redo_edit,
    reformat,
    submit_for_analysis,
    undo_edit,
)
from .editing import apply_default
from .indent import insert_indent, newline_with_indent, remove_indent

__all__ = [
    "apply_default",
    "close_bracket",
    "format_document",
    "insert_indent",
    "newline_with_indent",
    "redo_edit",
    "reformat",
    "remove_indent",
    "submit_for_analysis",
    "undo_edit",
]
