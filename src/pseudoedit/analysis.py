"""Boundaries to the external analysis and translation services.

The editor never talks to a network itself. Hosts inject objects satisfying
``AnalysisService`` / ``TranslationService``; the helpers here turn their
results or exceptions into plain outcome records the UI can show.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pseudoedit.runtime import telemetry


class AnalysisService(Protocol):
    def analyze(self, code: str) -> Any:
        ...


class TranslationService(Protocol):
    def translate(self, prompt: str) -> str:
        ...


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    ok: bool
    result: Any = None
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TranslationOutcome:
    text: Optional[str] = None
    error: Optional[str] = None


def submit_for_analysis(service: AnalysisService, text: str) -> AnalysisOutcome:
    """Send ``text`` for analysis; blank documents are rejected up front."""

    if not text.strip():
        return AnalysisOutcome(ok=False, error="Nothing to analyze")

    with telemetry.span(
        "analysis::submit", component="analysis", metadata={"chars": len(text)}
    ) as handle:
        try:
            result = service.analyze(text)
        except Exception as exc:  # noqa: BLE001 - surfaced as an outcome
            handle.add_metadata("status", "error")
            telemetry.record_event(
                "analysis.failed", level="error", data={"error": str(exc)}
            )
            return AnalysisOutcome(ok=False, error=str(exc) or type(exc).__name__)
        handle.add_metadata("status", "ok")
    return AnalysisOutcome(ok=True, result=result)


def request_translation(service: TranslationService, prompt: str) -> TranslationOutcome:
    """Ask for pseudocode generated from a natural-language ``prompt``."""

    if not prompt.strip():
        return TranslationOutcome(error="Prompt is empty")

    with telemetry.span(
        "translation::request", component="analysis", metadata={"chars": len(prompt)}
    ) as handle:
        try:
            text = service.translate(prompt)
        except Exception as exc:  # noqa: BLE001 - surfaced as an outcome
            handle.add_metadata("status", "error")
            telemetry.record_event(
                "translation.failed", level="error", data={"error": str(exc)}
            )
            return TranslationOutcome(error=str(exc) or type(exc).__name__)
        handle.add_metadata("status", "ok")
    return TranslationOutcome(text=text)


__all__ = [
    "AnalysisOutcome",
    "AnalysisService",
    "TranslationOutcome",
    "TranslationService",
    "request_translation",
    "submit_for_analysis",
]
