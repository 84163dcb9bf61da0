"""Editor configuration and input-unit constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "RAWEDIT_"

NEWLINE = "\n"
TAB = "\t"
BACKSPACE_UNITS = ("\b", "\x7f")

RENDER_STRATEGIES = ("diff", "clear")

# Single-byte files; every byte maps to exactly one character.
FILE_ENCODING = "latin-1"


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True)
class EditorConfig:
    """Tunables shared by the buffer, keymaps and renderer."""

    tab_width: int = 4
    page_size: int = 10
    render_strategy: str = "diff"

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.render_strategy not in RENDER_STRATEGIES:
            raise ValueError(
                f"Unknown render strategy '{self.render_strategy}', "
                f"expected one of {RENDER_STRATEGIES}"
            )

    @classmethod
    def from_env(cls) -> "EditorConfig":
        defaults = cls()
        return cls(
            tab_width=_env_int(f"{ENV_PREFIX}TAB_WIDTH", defaults.tab_width),
            page_size=_env_int(f"{ENV_PREFIX}PAGE_SIZE", defaults.page_size),
            render_strategy=os.environ.get(
                f"{ENV_PREFIX}RENDER_STRATEGY", defaults.render_strategy
            ).lower(),
        )

    def with_overrides(self, *, render_strategy: Optional[str] = None) -> "EditorConfig":
        if render_strategy is None:
            return self
        return replace(self, render_strategy=render_strategy)


__all__ = [
    "BACKSPACE_UNITS",
    "EditorConfig",
    "FILE_ENCODING",
    "NEWLINE",
    "RENDER_STRATEGIES",
    "TAB",
]
