"""Whole-document actions: reformat, undo/redo and analysis hand-off."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pseudoedit.editing.base import EditContext, KeyResult
from pseudoedit.formatting import normalize_indentation
from pseudoedit.runtime import telemetry

from .core import changed, unchanged

if TYPE_CHECKING:
    from pseudoedit.keymaps.resolver import ResolutionMatch


def reformat(context: EditContext) -> KeyResult:
    """Normalize indentation of the whole buffer in one replacement."""

    buffer = context.buffer
    if context.config.read_only:
        return unchanged("read_only")
    if not buffer.text.strip():
        return unchanged("format_empty")

    formatted = normalize_indentation(
        buffer.text,
        context.config.indent_unit_width,
        tab_width=context.config.tab_width,
    )
    telemetry.record_event(
        "document.format",
        data={
            "lines": buffer.line_count,
            "changed": formatted != buffer.text,
        },
    )
    if formatted == buffer.text:
        return unchanged("format_clean")
    delta = buffer.replace_all(formatted, label="format")
    context.bus.emit("document.formatted", delta.text)
    return changed(delta, status="format")


def format_document(context: EditContext, match: ResolutionMatch) -> KeyResult:
    del match
    return reformat(context)


def undo_edit(context: EditContext, match: ResolutionMatch) -> KeyResult:
    del match
    delta = context.buffer.undo()
    if delta is None:
        return unchanged("undo_empty")
    return changed(delta, status="undo")


def redo_edit(context: EditContext, match: ResolutionMatch) -> KeyResult:
    del match
    delta = context.buffer.redo()
    if delta is None:
        return unchanged("redo_empty")
    return changed(delta, status="redo")


def submit_for_analysis(context: EditContext, match: ResolutionMatch) -> KeyResult:
    """Hand the current text to whoever listens on ``analysis.submit``."""

    del match
    text = context.buffer.text
    context.bus.emit("analysis.submit", text)
    return unchanged("analysis_submit", message=f"{len(text)} chars")


__all__ = [
    "reformat",
    "format_document",
    "undo_edit",
    "redo_edit",
    "submit_for_analysis",
]
