from __future__ import annotations

import pytest

from pseudoedit.buffer import Buffer, BufferValidationError, Caret


def test_replace_range_moves_caret_to_inserted_end() -> None:
    buffer = Buffer.from_text("x ← 1")

    delta = buffer.replace_range(4, 5, "42", label="edit")

    assert delta.text == "x ← 42"
    assert buffer.caret == Caret.at(6)
    assert delta.version == buffer.version == 1


def test_replace_range_with_explicit_caret() -> None:
    buffer = Buffer.from_text("f")

    buffer.replace_range(1, 1, "()", label="pair", caret=2)

    assert buffer.text == "f()"
    assert buffer.caret == Caret.at(2)


def test_replace_all_clamps_existing_caret() -> None:
    buffer = Buffer.from_text("abcdef")
    buffer.select(2, 6)

    buffer.replace_all("abc", label="shrink")

    assert buffer.caret == Caret(2, 3)


def test_undo_and_redo_restore_text_and_caret() -> None:
    buffer = Buffer.from_text("a")
    buffer.select(1)
    buffer.insert_text("b")
    buffer.insert_text("c")

    buffer.undo()
    assert buffer.text == "ab"
    assert buffer.caret == Caret.at(2)

    buffer.undo()
    assert buffer.text == "a"
    assert buffer.undo() is None

    redone = buffer.redo()
    assert redone is not None
    assert redone.text == "ab"


def test_unchanged_text_is_not_recorded_for_undo() -> None:
    buffer = Buffer.from_text("same")

    buffer.replace_all("same", label="noop")

    assert not buffer.undo_timeline.can_undo()


def test_new_edit_discards_redo_tail() -> None:
    buffer = Buffer.from_text("")
    buffer.insert_text("a")
    buffer.undo()

    buffer.insert_text("z")

    assert not buffer.undo_timeline.can_redo()
    assert buffer.text == "z"


def test_line_helpers() -> None:
    buffer = Buffer.from_text("one\ntwo\nthree")

    assert buffer.line_count == 3
    assert buffer.lines == ("one", "two", "three")
    assert buffer.line_start(5) == 4
    assert buffer.line_end(5) == 7
    assert buffer.get_text_range(8, 4) == "two\n"


def test_selection_flag() -> None:
    buffer = Buffer.from_text("abc")
    assert not buffer.has_selection

    buffer.select(3, 1)

    assert buffer.has_selection
    assert buffer.caret.ordered() == (1, 3)


def test_out_of_range_offsets_raise() -> None:
    buffer = Buffer.from_text("abc")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.select(4)
    assert excinfo.value.offset == 4

    with pytest.raises(BufferValidationError):
        buffer.replace_range(-1, 2, "", label="bad")


def test_mirror_carries_attributes() -> None:
    buffer = Buffer.from_text("abc", name="doc")

    mirror = buffer.mirror(attributes={"read_only": "true"})

    assert mirror.text == "abc"
    assert mirror.attributes == {"read_only": "true"}
    assert mirror.version == buffer.version
