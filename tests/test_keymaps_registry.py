import pytest

from pseudoedit.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    stroke: str = "TAB",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke.parse(stroke),
        action_id=action_id,
        when=when,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="indent.tab")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(token="TAB")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="indent.tab"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="indent.tab.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["indent.tab"]


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(
        make_binding(binding_id="editable", when=(WhenClause.parse("!read_only"),))
    )
    registry.register_binding(
        make_binding(binding_id="locked", when=(WhenClause("read_only"),))
    )

    assert registry.stats().binding_count == 2


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", stroke="shift+TAB")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.stats().tokens == ("shift+TAB",)


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_stroke_parse_handles_modifiers_and_plus_key() -> None:
    assert KeyStroke.parse("shift+TAB") == KeyStroke("TAB", ("shift",))
    assert KeyStroke.parse("CTRL+f").token == "ctrl+f"
    assert KeyStroke.parse("+").token == "+"
    assert KeyStroke.parse("ctrl++").token == "ctrl++"


def test_load_default_keymaps_registers_editor_bindings() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    tokens = registry.stats().tokens
    for token in ("TAB", "shift+TAB", "ENTER", "(", "[", "{", "ctrl+f"):
        assert token in tokens
    assert registry.get_binding("brackets.paren").when_map == {
        "read_only": False,
        "has_selection": False,
    }


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, include_bindings=("indent.tab",))

    assert registry.stats().binding_count == 1
    assert registry.get_binding("indent.tab").action_id == "indent.insert"


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    extra = Binding(
        id="brackets.angle_paren",
        stroke=KeyStroke("(", ("alt",)),
        action_id="brackets.close",
    )

    load_default_keymaps(
        registry, exclude_bindings=("brackets.curly",), extra_bindings=(extra,)
    )

    with pytest.raises(KeyError):
        registry.get_binding("brackets.curly")
    assert registry.get_binding("brackets.angle_paren").token == "alt+("
