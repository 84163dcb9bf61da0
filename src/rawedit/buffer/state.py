"""Cursor, viewport, and run-state tracking for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (line, column)


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + viewport info tied to a BufferDocument."""

    cursor_line: int = 0
    cursor_column: int = 0
    viewport_offset: int = 0
    running: bool = True

    @property
    def cursor(self) -> Cursor:
        return (self.cursor_line, self.cursor_column)

    def set_cursor(self, line: int, column: int) -> None:
        self.cursor_line = line
        self.cursor_column = column
