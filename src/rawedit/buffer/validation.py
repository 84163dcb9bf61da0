"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .document import BufferDocument
from .state import Cursor

if TYPE_CHECKING:  # pragma: no cover
    from .buffer import EditBuffer


class BufferValidationError(RuntimeError):
    """Raised when a buffer is handed or reaches out-of-bounds cursor info."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    line, column = cursor
    if line < 0 or line >= document.line_count:
        raise BufferValidationError("Line out of range", cursor=cursor)
    text = document.get_line(line)
    if column < 0 or column > len(text):
        raise BufferValidationError("Column out of range", cursor=cursor)
    return cursor


def check_invariants(buffer: "EditBuffer") -> None:
    """Raise ``BufferValidationError`` if ``buffer`` is in an impossible state."""

    if buffer.document.line_count < 1:
        raise BufferValidationError("Buffer has no lines")
    ensure_cursor(buffer.document, buffer.cursor)
    offset = buffer.viewport_offset
    if offset < 0 or offset > buffer.cursor_line:
        raise BufferValidationError(
            f"Viewport offset {offset} outside [0, {buffer.cursor_line}]",
            cursor=buffer.cursor,
        )
