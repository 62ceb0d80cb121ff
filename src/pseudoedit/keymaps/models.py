"""Dataclasses describing key bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def stroke_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Canonical lookup token, e.g. ``shift+TAB`` or ``(``."""

    normalized = normalize_modifiers(modifiers)
    if normalized:
        return f"{'+'.join(normalized)}+{key}"
    return key


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return stroke_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Parse ``"shift+TAB"`` style specs; a bare ``+`` is the plus key."""

        if "+" not in spec[:-1]:
            return cls(spec)
        prefix, _, key = spec[:-1].rpartition("+")
        return cls(key + spec[-1], tuple(prefix.split("+")))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag condition gating a binding, ``!flag`` negates."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with an action and its gating flags."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
                for clause in self.when
            ),
        )

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def token(self) -> str:
        return self.stroke.token


__all__ = [
    "KeyStroke",
    "WhenClause",
    "ActionRef",
    "Binding",
    "normalize_modifiers",
    "stroke_token",
]
