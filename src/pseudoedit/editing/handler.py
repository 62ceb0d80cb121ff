"""Keystroke handler: resolve bindings, run actions, fall back to plain editing."""

from __future__ import annotations

from pseudoedit.actions.editing import apply_default
from pseudoedit.keymaps import defaults as keymap_defaults
from pseudoedit.keymaps.models import stroke_token
from pseudoedit.keymaps.registry import KeymapRegistry
from pseudoedit.keymaps.resolver import KeymapResolver, ResolutionMatch
from pseudoedit.runtime import telemetry

from .base import EditContext, KeyInput, KeyResult


def key_to_token(key: KeyInput) -> str:
    return stroke_token(key.key, key.modifiers)


class KeystrokeHandler:
    """Dispatches key input against the keymap and the current editor flags.

    Every matched action replaces the buffer and sets the caret in one
    transaction; ``KeyResult.caret`` tells the host where to put its visible
    caret once it has re-rendered.
    """

    def __init__(
        self,
        context: EditContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="pseudoedit.keymaps"
        )
        if load_defaults and keymap_registry is None:
            keymap_defaults.load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="pseudoedit.keymaps"
        )

    def handle_key(self, key: KeyInput) -> KeyResult:
        token = key_to_token(key)
        flags = self.context.flags()
        with telemetry.span(
            name="keystroke::handle",
            component=True,
            metadata={"token": token, **flags},
        ):
            resolution = self.keymap_resolver.resolve(token, context=flags)
            if resolution.status == "match" and resolution.match:
                result = self._execute_match(resolution.match)
            else:
                result = apply_default(self.context, key)

        if result.changed:
            self.context.bus.emit("buffer.changed", self.context.buffer.text)
        return result

    def _execute_match(self, match: ResolutionMatch) -> KeyResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, KeyResult):
            return outcome
        return KeyResult(consumed=True)


__all__ = ["KeystrokeHandler", "key_to_token"]
