"""Caret and selection state expressed as offsets into the buffer text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Caret:
    """Selection ``(start, end)``; a plain caret when both offsets agree.

    ``start`` may exceed ``end`` for backwards selections; use ``ordered`` to
    get the span in text order.
    """

    start: int = 0
    end: int = 0

    @classmethod
    def at(cls, offset: int) -> "Caret":
        return cls(offset, offset)

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    @property
    def position(self) -> int:
        return self.end

    def ordered(self) -> tuple[int, int]:
        return (self.start, self.end) if self.start <= self.end else (self.end, self.start)
