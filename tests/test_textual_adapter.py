from __future__ import annotations

from typing import Any, List

from pseudoedit.adapters.textual import TextualEditorAdapter, TextualUIHooks
from pseudoedit.analysis import AnalysisOutcome
from pseudoedit.buffer import Caret
from pseudoedit.config import EditorConfig
from pseudoedit.surface import EditorSurface


class EchoAnalyzer:
    def analyze(self, code: str) -> Any:
        return len(code)


def make_adapter(
    text: str = "", *, read_only: bool = False, **hooks: Any
) -> TextualEditorAdapter:
    surface = EditorSurface(text, config=EditorConfig(read_only=read_only))
    surface.buffer.select(len(text))
    hooks.setdefault("update_buffer", lambda mirror: None)
    return TextualEditorAdapter(surface, TextualUIHooks(**hooks))


def test_adapter_updates_buffer_and_status() -> None:
    updates: List[str] = []
    statuses: List[str] = []
    adapter = make_adapter(
        "for i to n do",
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=statuses.append,
    )

    adapter.handle_textual_key("ENTER")

    assert updates[0] == "for i to n do"
    assert updates[-1] == "for i to n do\n    "
    assert "newline" in statuses


def test_adapter_passes_shift_modifier() -> None:
    adapter = make_adapter("    x")

    adapter.handle_textual_key("TAB", modifiers=("shift",))

    assert adapter.surface.get_text() == "x"


def test_adapter_marks_read_only_mirror() -> None:
    mirrors: List[Any] = []
    adapter = make_adapter("x", read_only=True, update_buffer=mirrors.append)

    result = adapter.handle_textual_key("a", text="a")

    assert result.status == "read_only"
    assert mirrors[-1].attributes["read_only"] == "true"
    assert adapter.surface.get_text() == "x"


def test_adapter_restores_caret_through_hook() -> None:
    carets: List[Caret] = []
    adapter = make_adapter("f", restore_caret=carets.append)

    adapter.handle_textual_key("[", text="[")

    assert carets == [Caret.at(2)]


def test_adapter_relays_events_and_runs_analysis() -> None:
    events: List[tuple[str, object | None]] = []
    adapter = make_adapter(
        "x ← 1",
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter.analysis_service = EchoAnalyzer()

    adapter.handle_textual_key("r", modifiers=("ctrl",))

    assert ("analysis.submit", "x ← 1") in events
    assert ("analysis.result", AnalysisOutcome(ok=True, result=5)) in events
    assert adapter.last_analysis == AnalysisOutcome(ok=True, result=5)


def test_adapter_translation_without_service_keeps_text() -> None:
    statuses: List[str] = []
    adapter = make_adapter("old", update_status=statuses.append)

    outcome = adapter.translate("sort a list")

    assert outcome.error
    assert adapter.surface.get_text() == "old"
    assert statuses[-1].startswith("translation failed")


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(log=logs.append)

    adapter.handle_textual_key("a", text="a")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
