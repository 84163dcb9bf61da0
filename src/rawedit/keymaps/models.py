"""Dataclasses describing keymap bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

def describe_unit(unit: str) -> str:
    """Printable name for an input unit, used in ids and log lines."""

    if not unit:
        return "<eof>"
    if unit.isprintable() and not unit.isspace():
        return unit
    return f"0x{ord(unit):02x}"

@dataclass(frozen=True, slots=True)
class ActionRef:
    """Callable metadata used during binding execution.

    Handlers are called as ``handler(buffer, unit)``; ``telemetry_name``
    names the ``buffer::<name>`` span the call runs in.
    """

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a single input unit with an action."""

    id: str
    unit: str
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if len(self.unit) != 1:
            raise ValueError(
                f"binding '{self.id}' must bind exactly one unit, got {self.unit!r}"
            )
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return describe_unit(self.unit)

__all__ = [
    "ActionRef",
    "Binding",
    "describe_unit",
]
