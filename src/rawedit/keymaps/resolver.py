"""Unit-to-action resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from rawedit.runtime.telemetry import span

from .models import ActionRef, Binding, describe_unit
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver.

    ``binding`` is ``None`` when the unit fell through to the fallback action.
    """

    status: Literal["match", "fallback"]
    action: ActionRef
    binding: Optional[Binding] = None


class KeymapResolver:
    """Resolves a single input unit against a registry snapshot."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Optional[tuple[int, Dict[str, ResolutionResult]]] = None

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, unit: str) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"unit": describe_unit(unit)},
        ) as handle:
            table = self._ensure_table()
            result = table.get(unit)
            if result is not None:
                handle.add_metadata("status", "match")
                return result
            handle.add_metadata("status", "fallback")
            return ResolutionResult(
                status="fallback", action=self._registry.fallback_action()
            )

    def _ensure_table(self) -> Dict[str, ResolutionResult]:
        revision = self._registry.revision()
        if self._cache and self._cache[0] == revision:
            return self._cache[1]

        table: Dict[str, ResolutionResult] = {}
        for binding in self._registry.iter_bindings():
            action = self._registry.get_action(binding.action_id)
            table[binding.unit] = ResolutionResult(
                status="match", action=action, binding=binding
            )
        self._cache = (revision, table)
        return table


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
]
