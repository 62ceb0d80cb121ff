from __future__ import annotations

from pseudoedit.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    key: str = "(",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_token() -> None:
    binding = make_binding("brackets.paren")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("(")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.test"


def test_resolver_misses_unbound_token() -> None:
    resolver = KeymapResolver(build_registry([make_binding("brackets.paren")]))

    assert resolver.resolve("x").status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "brackets.paren",
        when=(WhenClause.parse("!has_selection"),),
    )
    resolver = KeymapResolver(build_registry([gating]))

    gated = resolver.resolve("(", context={"has_selection": True})
    assert gated.status == "gated"
    assert gated.match is None
    assert gated.candidates == 1

    hit = resolver.resolve("(", context={"has_selection": False})
    assert hit.status == "match"


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("low", action_id="core.low", when=(WhenClause("a"),))
    high = make_binding(
        "high", action_id="core.high", when=(WhenClause("b"),), priority=5
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve("(", context={"a": True, "b": True})

    assert result.match is not None
    assert result.match.binding.id == "high"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("x")
    assert miss.status == "miss"

    new_binding = make_binding("core.x", key="x", action_id="core.x")
    registry.register_action(make_action("core.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("x")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id
