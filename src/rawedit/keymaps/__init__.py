"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, describe_unit
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionResult
from .defaults import FALLBACK_ACTION_ID, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "describe_unit",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "FALLBACK_ACTION_ID",
    "load_default_keymaps",
]
