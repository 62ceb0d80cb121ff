"""Text buffer façade: one string, one caret, undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from pseudoedit.runtime import telemetry

from .state import Caret
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_offset, ensure_caret, ensure_offset


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    caret: Caret
    label: str


class Buffer:
    """Owns the raw text; lines are always derived, never stored."""

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        caret: Optional[Caret] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self._text = text
        self._caret = ensure_caret(text, caret or Caret.at(0))
        self.version = 0
        self.undo_timeline = undo or UndoTimeline()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(text, name=name)

    @property
    def text(self) -> str:
        return self._text

    @property
    def caret(self) -> Caret:
        return self._caret

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._text.split("\n"))

    @property
    def line_count(self) -> int:
        return self._text.count("\n") + 1

    @property
    def has_selection(self) -> bool:
        return not self._caret.collapsed

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._text,
            caret=self._caret,
            version=self.version,
            attributes=dict(attributes or {}),
        )

    def select(self, start: int, end: Optional[int] = None) -> Caret:
        """Move the caret (or selection) without touching the text."""

        end = start if end is None else end
        self._caret = ensure_caret(self._text, Caret(start, end))
        return self._caret

    def line_start(self, offset: Optional[int] = None) -> int:
        position = self._caret.position if offset is None else offset
        return self._text.rfind("\n", 0, position) + 1

    def line_end(self, offset: Optional[int] = None) -> int:
        position = self._caret.position if offset is None else offset
        end = self._text.find("\n", position)
        return len(self._text) if end == -1 else end

    def replace_range(
        self,
        start: int,
        end: int,
        text: str,
        *,
        label: str,
        caret: Optional[int] = None,
    ) -> BufferDelta:
        """Replace ``[start:end]`` and place the caret in the same step.

        The caret defaults to the end of the inserted text.
        """

        ensure_offset(self._text, start)
        ensure_offset(self._text, end)
        if start > end:
            start, end = end, start
        new_text = self._text[:start] + text + self._text[end:]
        target = start + len(text) if caret is None else caret
        return self.replace_all(new_text, label=label, caret=Caret.at(target))

    def replace_all(
        self, text: str, *, label: str, caret: Optional[Caret] = None
    ) -> BufferDelta:
        """Swap the whole text; the caret is clamped when not given."""

        with Transaction(self, label) as tx:
            if caret is None:
                caret = Caret(
                    clamp_offset(text, self._caret.start),
                    clamp_offset(text, self._caret.end),
                )
            tx.commit(text, ensure_caret(text, caret))
        return self._delta(label)

    def insert_text(self, text: str) -> BufferDelta:
        start, end = self._caret.ordered()
        return self.replace_range(start, end, text, label="insert_text")

    def delete_range(self, start: int, end: int) -> BufferDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def get_text_range(self, start: int, end: int) -> str:
        if start > end:
            start, end = end, start
        ensure_offset(self._text, start)
        ensure_offset(self._text, end)
        return self._text[start:end]

    def undo(self) -> Optional[BufferDelta]:
        entry = self.undo_timeline.undo()
        if entry is None:
            return None
        self._restore(entry.before_text, entry.caret_before)
        return self._delta("undo")

    def redo(self) -> Optional[BufferDelta]:
        entry = self.undo_timeline.redo()
        if entry is None:
            return None
        self._restore(entry.after_text, entry.caret_after)
        return self._delta("redo")

    def _restore(self, text: str, caret: Caret) -> None:
        self._text = text
        self._caret = caret
        self.version += 1

    def _delta(self, label: str) -> BufferDelta:
        return BufferDelta(
            version=self.version, text=self._text, caret=self._caret, label=label
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Applies one text + caret change and records it for undo."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, after_text: str, caret_after: Caret) -> None:
        buffer = self.buffer
        if after_text != buffer.text:
            buffer.undo_timeline.push(
                UndoEntry(
                    label=self.label,
                    before_text=buffer.text,
                    after_text=after_text,
                    caret_before=buffer.caret,
                    caret_after=caret_after,
                )
            )
        buffer._text = after_text
        buffer._caret = caret_after
        buffer.version += 1

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
