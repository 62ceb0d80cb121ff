"""Resolve a key token plus editor flags to a single binding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional

from pseudoedit.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "gated", "miss"]
    match: Optional[ResolutionMatch] = None
    candidates: int = 0


class KeymapResolver:
    """Caches the registry's token index per revision and picks winners."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Optional[tuple[int, Dict[str, list[Binding]]]] = None

    def resolve(
        self, token: str, *, context: Optional[Mapping[str, bool]] = None
    ) -> ResolutionResult:
        ctx = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"token": token},
        ) as handle:
            candidates = self._index().get(token, [])
            if not candidates:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            for binding in candidates:
                if binding.allows(ctx):
                    handle.add_metadata("status", "match")
                    handle.add_metadata("binding_id", binding.id)
                    action = self._registry.get_action(binding.action_id)
                    return ResolutionResult(
                        status="match",
                        match=ResolutionMatch(binding=binding, action=action),
                        candidates=len(candidates),
                    )

            # Bound key, but every binding is switched off by the flags.
            handle.add_metadata("status", "gated")
            return ResolutionResult(status="gated", candidates=len(candidates))

    def _index(self) -> Dict[str, list[Binding]]:
        revision = self._registry.revision()
        if self._cache and self._cache[0] == revision:
            return self._cache[1]

        index: Dict[str, list[Binding]] = {}
        for binding in self._registry.iter_bindings():
            index.setdefault(binding.token, []).append(binding)
        for bucket in index.values():
            bucket.sort(key=lambda b: (-b.priority, b.id))
        self._cache = (revision, index)
        return index


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
