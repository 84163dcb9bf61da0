"""Terminal size query."""

from __future__ import annotations

import shutil
from typing import Tuple


class TerminalGeometry:
    """Callable returning the terminal's ``(columns, rows)``."""

    def __init__(self, fallback: Tuple[int, int] = (80, 24)) -> None:
        self._fallback = fallback

    def __call__(self) -> Tuple[int, int]:
        size = shutil.get_terminal_size(self._fallback)
        return size.columns, size.lines


__all__ = ["TerminalGeometry"]
