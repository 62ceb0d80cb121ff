from __future__ import annotations

from typing import List, Optional

import pytest

from pseudoedit.buffer import Buffer, Caret
from pseudoedit.config import EditorConfig
from pseudoedit.editing import EditContext, KeyInput
from pseudoedit.editing.handler import KeystrokeHandler

TAB = KeyInput("TAB")
SHIFT_TAB = KeyInput("TAB", ("SHIFT",))
ENTER = KeyInput("ENTER")


def make_handler(
    text: str = "",
    caret: Optional[Caret] = None,
    **config: object,
) -> KeystrokeHandler:
    buffer = Buffer.from_text(text)
    caret = caret or Caret.at(len(text))
    buffer.select(caret.start, caret.end)
    context = EditContext(buffer=buffer, config=EditorConfig(**config))  # type: ignore[arg-type]
    return KeystrokeHandler(context)


def typed(char: str) -> KeyInput:
    return KeyInput(char, text=char)


def state(handler: KeystrokeHandler) -> tuple[str, Caret]:
    buffer = handler.context.buffer
    return buffer.text, buffer.caret


def test_tab_inserts_indent_unit() -> None:
    handler = make_handler("abc")

    result = handler.handle_key(TAB)

    assert result.consumed and result.changed
    assert state(handler) == ("abc    ", Caret.at(7))
    assert result.caret == Caret.at(7)


def test_tab_replaces_selection() -> None:
    handler = make_handler("abcd", Caret(1, 3))

    handler.handle_key(TAB)

    assert state(handler) == ("a    d", Caret.at(5))


def test_tab_uses_configured_width() -> None:
    handler = make_handler("", indent_unit_width=2)

    handler.handle_key(TAB)

    assert state(handler) == ("  ", Caret.at(2))


def test_shift_tab_removes_unit_at_line_start() -> None:
    handler = make_handler("x\n    y ← 1", Caret.at(7))

    result = handler.handle_key(SHIFT_TAB)

    assert result.status == "dedent"
    assert state(handler) == ("x\ny ← 1", Caret.at(3))


def test_shift_tab_without_full_unit_is_consumed_noop() -> None:
    handler = make_handler("  y", Caret.at(3))

    result = handler.handle_key(SHIFT_TAB)

    assert result.consumed
    assert not result.changed
    assert result.status == "dedent_skipped"
    assert state(handler) == ("  y", Caret.at(3))


def test_tab_then_shift_tab_round_trip() -> None:
    handler = make_handler("x ← 1\nreturn x", Caret.at(6))

    handler.handle_key(TAB)
    assert state(handler) == ("x ← 1\n    return x", Caret.at(10))

    handler.handle_key(SHIFT_TAB)
    assert state(handler) == ("x ← 1\nreturn x", Caret.at(6))


def test_shift_tab_after_mid_line_tab_is_skipped() -> None:
    handler = make_handler("x", Caret.at(1))

    handler.handle_key(TAB)
    result = handler.handle_key(SHIFT_TAB)

    assert result.status == "dedent_skipped"
    assert state(handler) == ("x    ", Caret.at(5))


@pytest.mark.parametrize("opener, closer", [("(", ")"), ("[", "]"), ("{", "}")])
def test_bracket_pairs(opener: str, closer: str) -> None:
    handler = make_handler("f")

    result = handler.handle_key(typed(opener))

    assert result.status == "bracket_pair"
    assert state(handler) == (f"f{opener}{closer}", Caret.at(2))


def test_bracket_with_selection_types_plain_character() -> None:
    handler = make_handler("abc", Caret(0, 3))

    result = handler.handle_key(typed("("))

    assert result.status == "insert"
    assert state(handler) == ("(", Caret.at(1))


def test_enter_after_block_opener_adds_unit() -> None:
    line = "    for i to n do"
    handler = make_handler(line)

    handler.handle_key(ENTER)

    expected = line + "\n" + " " * 8
    assert state(handler) == (expected, Caret.at(len(expected)))


def test_enter_carries_indentation() -> None:
    handler = make_handler("  x ← 1")

    handler.handle_key(ENTER)

    assert state(handler) == ("  x ← 1\n  ", Caret.at(10))


def test_enter_after_then_with_trailing_spaces() -> None:
    handler = make_handler("if x then  ")

    handler.handle_key(ENTER)

    assert handler.context.buffer.text == "if x then  \n    "


def test_enter_ignores_opener_inside_word() -> None:
    handler = make_handler("undo")

    handler.handle_key(ENTER)

    assert handler.context.buffer.text == "undo\n"


def test_enter_mid_line_splits_text() -> None:
    handler = make_handler("if x then y", Caret.at(9))

    handler.handle_key(ENTER)

    assert state(handler) == ("if x then\n     y", Caret.at(14))


def test_enter_keeps_selected_text() -> None:
    handler = make_handler("abcdef", Caret(2, 4))

    result = handler.handle_key(ENTER)

    assert result.status == "newline"
    assert state(handler) == ("ab\ncdef", Caret.at(3))


def test_read_only_blocks_bound_keys() -> None:
    handler = make_handler("abc", read_only=True)

    tab = handler.handle_key(TAB)
    typed_result = handler.handle_key(typed("("))

    assert not tab.consumed
    assert typed_result.status == "read_only"
    assert handler.context.buffer.text == "abc"


def test_default_editing_types_and_deletes() -> None:
    handler = make_handler("ab")

    handler.handle_key(typed("c"))
    handler.handle_key(KeyInput("LEFT"))
    handler.handle_key(KeyInput("BACKSPACE"))

    assert state(handler) == ("ac", Caret.at(1))


def test_shift_motion_extends_selection() -> None:
    handler = make_handler("abc", Caret.at(0))

    handler.handle_key(KeyInput("END", ("SHIFT",)))

    assert handler.context.buffer.caret == Caret(0, 3)


def test_format_undo_and_redo_keys() -> None:
    handler = make_handler("a\n  b")

    formatted = handler.handle_key(KeyInput("f", ("CTRL",)))
    assert formatted.status == "format"
    assert handler.context.buffer.text == "a\n    b"

    handler.handle_key(KeyInput("z", ("CTRL",)))
    assert handler.context.buffer.text == "a\n  b"

    handler.handle_key(KeyInput("y", ("CTRL",)))
    assert handler.context.buffer.text == "a\n    b"


def test_control_keys_do_not_insert_text() -> None:
    handler = make_handler("abc")

    result = handler.handle_key(KeyInput("k", ("CTRL",)))

    assert not result.consumed
    assert handler.context.buffer.text == "abc"


def test_analysis_key_publishes_text() -> None:
    handler = make_handler("x ← 1")
    submitted: List[object] = []
    handler.context.bus.subscribe("analysis.submit", submitted.append)

    handler.handle_key(KeyInput("r", ("CTRL",)))

    assert submitted == ["x ← 1"]


def test_changes_emit_buffer_changed() -> None:
    handler = make_handler("")
    seen: List[object] = []
    handler.context.bus.subscribe("buffer.changed", seen.append)

    handler.handle_key(typed("a"))
    handler.handle_key(KeyInput("LEFT"))

    assert seen == ["a"]
