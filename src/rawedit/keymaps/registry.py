"""Keymap registry: actions, one-unit bindings, and the fallback action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ContextManager, Dict, Iterator, Optional

from rawedit.runtime.telemetry import SpanHandle, span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    """Snapshot of what the registry currently holds."""

    action_count: int
    binding_count: int
    units: tuple[str, ...]
    fallback: Optional[str]


class KeymapConflictError(RuntimeError):
    """A binding claimed a unit that another binding already owns."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' wants {binding.key_signature!s} "
            f"which is bound by '{existing.id}'"
        )
        self.binding = binding
        self.conflicts = (existing,)


class KeymapRegistry:
    """Owns action references, unit bindings, and the fallback action.

    Every mutation bumps :meth:`revision` so resolvers can drop cached tables.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._by_unit: Dict[str, Binding] = {}
        self._fallback: Optional[str] = None
        self._logger_name = logger_name
        self._revision = 0

    def _span(self, operation: str, **metadata: object) -> ContextManager[SpanHandle]:
        return span(
            f"keymaps::{operation}",
            logger_name=self._logger_name,
            component="keymaps",
            metadata=metadata,
        )

    def revision(self) -> int:
        return self._revision

    # -- actions -------------------------------------------------------------

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with self._span("register_action", action_id=action.id):
            if action.id in self._actions and not replace:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            self._revision += 1
            return action

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def set_fallback(self, action_id: str) -> None:
        """Route every unbound unit to ``action_id``."""

        if action_id not in self._actions:
            raise KeyError(f"Fallback references unknown action '{action_id}'")
        self._fallback = action_id
        self._revision += 1

    def fallback_action(self) -> ActionRef:
        if self._fallback is None:
            raise LookupError("No fallback action registered")
        return self._actions[self._fallback]

    # -- bindings ------------------------------------------------------------

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.unit``.

        With ``replace`` any binding on the same unit, or with the same id,
        is dropped first; otherwise either case is an error.
        """

        with self._span(
            "register_binding", binding_id=binding.id, unit=binding.key_signature
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            owner = self.binding_for(binding.unit)
            if owner is not None and owner.id != binding.id and not replace:
                handle.add_metadata("conflicts", owner.id)
                raise KeymapConflictError(binding, owner)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in (owner, self._bindings.get(binding.id)):
                if stale is not None:
                    self._drop(stale)
            self._bindings[binding.id] = binding
            self._by_unit[binding.unit] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with self._span("unregister_binding", binding_id=binding_id):
            binding = self._bindings.get(binding_id)
            if binding is not None:
                self._drop(binding)
                self._revision += 1
            return binding

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def binding_for(self, unit: str) -> Optional[Binding]:
        return self._by_unit.get(unit)

    def iter_bindings(self) -> Iterator[Binding]:
        yield from self._bindings.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            units=tuple(sorted(self._by_unit)),
            fallback=self._fallback,
        )

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        if self._by_unit.get(binding.unit) is binding:
            del self._by_unit[binding.unit]


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
