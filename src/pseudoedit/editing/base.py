"""Value types shared by the keystroke handler and its actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from pseudoedit.buffer import Buffer, Caret
from pseudoedit.config import EditorConfig


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by a host adapter."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class KeyResult:
    """Outcome of one keystroke.

    ``consumed`` tells the host to suppress its own handling of the key;
    ``caret`` is set when the text changed and the host must move its
    visible caret once the new text is on screen.
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    changed: bool = False
    caret: Optional[Caret] = None


class EventBus:
    """Minimal event bus letting actions publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class EditContext:
    """Services every action can reach."""

    buffer: Buffer
    config: EditorConfig
    bus: EventBus = field(default_factory=EventBus)

    def flags(self) -> Dict[str, bool]:
        return {
            "read_only": self.config.read_only,
            "has_selection": self.buffer.has_selection,
        }


__all__ = ["KeyInput", "KeyResult", "EventBus", "EditContext"]
