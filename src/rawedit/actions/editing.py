"""Text-mutating actions bound to input units."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from rawedit.buffer import EditBuffer


def insert_literal(buffer: "EditBuffer", unit: str) -> None:
    buffer.insert_text(unit)


def insert_tab(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.insert_text(" " * buffer.config.tab_width)


def newline(buffer: "EditBuffer", unit: str) -> None:
    """Split at the cursor; the tail becomes the next line."""

    del unit
    buffer.split_line()


def open_line(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.open_line()


def backspace(buffer: "EditBuffer", unit: str) -> None:
    # Column 0 is a no-op: lines are never joined.
    del unit
    buffer.delete_backward()


def kill_line(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.kill_line()


def save(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.save()


__all__ = [
    "insert_literal",
    "insert_tab",
    "newline",
    "open_line",
    "backspace",
    "kill_line",
    "save",
]
