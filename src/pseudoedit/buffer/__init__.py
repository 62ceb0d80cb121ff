"""Buffer abstractions: text, caret offsets, transactions and undo."""

from .buffer import Buffer, BufferDelta, Transaction
from .state import Caret
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_offset, ensure_caret, ensure_offset

__all__ = [
    "Buffer",
    "BufferDelta",
    "Transaction",
    "Caret",
    "BufferMirror",
    "BufferValidationError",
    "UndoEntry",
    "UndoTimeline",
    "clamp_offset",
    "ensure_caret",
    "ensure_offset",
]
