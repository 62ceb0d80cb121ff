"""Keystroke handling: key input, results, context and event bus.

The dispatcher itself lives in ``pseudoedit.editing.handler``.
"""

from .base import EditContext, EventBus, KeyInput, KeyResult

__all__ = ["EditContext", "EventBus", "KeyInput", "KeyResult"]
