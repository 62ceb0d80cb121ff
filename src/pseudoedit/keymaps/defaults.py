"""Built-in bindings: indentation, bracket pairs, auto-indent and document keys."""

from __future__ import annotations

from typing import Iterable, Sequence

from pseudoedit.actions import brackets as bracket_actions
from pseudoedit.actions import document as document_actions
from pseudoedit.actions import indent as indent_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

EDITABLE = ("!read_only",)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="indent.insert",
        handler=indent_actions.insert_indent,
        description="Insert one indent unit at the caret",
    ),
    ActionRef(
        id="indent.remove",
        handler=indent_actions.remove_indent,
        description="Remove one indent unit from the line start",
    ),
    ActionRef(
        id="indent.newline",
        handler=indent_actions.newline_with_indent,
        description="New line carrying indentation forward",
    ),
    ActionRef(
        id="brackets.close",
        handler=bracket_actions.close_bracket,
        description="Insert a bracket pair around the caret",
    ),
    ActionRef(
        id="document.format",
        handler=document_actions.format_document,
        description="Normalize indentation of the whole document",
    ),
    ActionRef(
        id="document.undo",
        handler=document_actions.undo_edit,
        description="Undo the last edit",
    ),
    ActionRef(
        id="document.redo",
        handler=document_actions.redo_edit,
        description="Redo the last undone edit",
    ),
    ActionRef(
        id="analysis.submit",
        handler=document_actions.submit_for_analysis,
        description="Send the document to the analysis service",
    ),
)


def _bracket_binding(opener: str, name: str) -> Binding:
    return Binding(
        id=f"brackets.{name}",
        stroke=KeyStroke(opener),
        action_id="brackets.close",
        description=f"Auto-close {opener}",
        when=(*EDITABLE, "!has_selection"),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="indent.tab",
        stroke=KeyStroke("TAB"),
        action_id="indent.insert",
        description="Indent",
        when=EDITABLE,
    ),
    Binding(
        id="indent.shift_tab",
        stroke=KeyStroke("TAB", ("shift",)),
        action_id="indent.remove",
        description="Dedent",
        when=EDITABLE,
    ),
    Binding(
        id="indent.enter",
        stroke=KeyStroke("ENTER"),
        action_id="indent.newline",
        description="New line with auto-indent",
        when=EDITABLE,
    ),
    _bracket_binding("(", "paren"),
    _bracket_binding("[", "square"),
    _bracket_binding("{", "curly"),
    Binding(
        id="document.format",
        stroke=KeyStroke("f", ("ctrl",)),
        action_id="document.format",
        description="Format document",
        when=EDITABLE,
    ),
    Binding(
        id="document.undo",
        stroke=KeyStroke("z", ("ctrl",)),
        action_id="document.undo",
        description="Undo",
        when=EDITABLE,
    ),
    Binding(
        id="document.redo",
        stroke=KeyStroke("y", ("ctrl",)),
        action_id="document.redo",
        description="Redo",
        when=EDITABLE,
    ),
    Binding(
        id="analysis.submit",
        stroke=KeyStroke("r", ("ctrl",)),
        action_id="analysis.submit",
        description="Analyze",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and the selected bindings."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
