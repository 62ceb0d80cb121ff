"""Textual-facing controller that wires an EditorSurface into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from pseudoedit.analysis import (
    AnalysisOutcome,
    AnalysisService,
    TranslationOutcome,
    TranslationService,
    request_translation,
    submit_for_analysis,
)
from pseudoedit.buffer import BufferMirror, Caret
from pseudoedit.editing import KeyInput, KeyResult
from pseudoedit.surface import EditorSurface


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    restore_caret: Callable[[Caret], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges EditorSurface + bus events to a Textual-friendly surface."""

    def __init__(
        self,
        surface: EditorSurface,
        hooks: TextualUIHooks,
        *,
        analysis_service: Optional[AnalysisService] = None,
        translation_service: Optional[TranslationService] = None,
    ) -> None:
        self.surface = surface
        self.hooks = hooks
        self.analysis_service = analysis_service
        self.translation_service = translation_service
        self.last_analysis: Optional[AnalysisOutcome] = None
        surface.on_caret_moved = self._caret_moved
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> KeyResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.surface.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_key_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def format_document(self) -> KeyResult:
        result = self.surface.format()
        self._after_key_result(result)
        return result

    def translate(self, prompt: str) -> TranslationOutcome:
        """Fill the editor from a natural-language prompt, when a service exists."""

        if self.translation_service is None:
            outcome = TranslationOutcome(error="No translation service configured")
        else:
            outcome = request_translation(self.translation_service, prompt)
        if self.surface.apply_translation(outcome):
            self.hooks.update_status("translated")
            self._refresh_buffer()
        else:
            self.hooks.update_status(f"translation failed: {outcome.error}")
        self.hooks.handle_event("translation.result", outcome)
        return outcome

    def _after_key_result(self, result: KeyResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _subscribe_events(self) -> None:
        bus = self.surface.bus
        for event in ("buffer.changed", "document.formatted", "analysis.submit"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name == "analysis.submit" and isinstance(payload, str):
            self._run_analysis(payload)

    def _run_analysis(self, text: str) -> None:
        if self.analysis_service is None:
            self.hooks.update_status("analysis unavailable")
            return
        outcome = submit_for_analysis(self.analysis_service, text)
        self.last_analysis = outcome
        self.hooks.handle_event("analysis.result", outcome)
        self.hooks.update_status(
            "analysis complete" if outcome.ok else f"analysis failed: {outcome.error}"
        )

    def _caret_moved(self, caret: Caret) -> None:
        self._log_state("caret ->", start=caret.start, end=caret.end)
        self.hooks.restore_caret(caret)

    def _refresh_buffer(self) -> None:
        mirror = self.surface.buffer.mirror(
            attributes={"read_only": str(self.surface.read_only).lower()}
        )
        self.hooks.update_buffer(mirror)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.surface.buffer
        return {
            "caret": (buffer.caret.start, buffer.caret.end),
            "lines": buffer.line_count,
            "read_only": self.surface.read_only,
            "buffer": buffer.name,
            "buffer_version": buffer.version,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
