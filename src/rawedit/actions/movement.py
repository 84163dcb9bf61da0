"""Cursor movement actions. Every move clamps instead of raising."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from rawedit.buffer import EditBuffer


def back(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_column(buffer.cursor_column - 1)


def forward(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_column(buffer.cursor_column + 1)


def next_line(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_line(buffer.cursor_line + 1)


def prev_line(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_line(buffer.cursor_line - 1)


def line_start(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_column(0)


def line_end(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_column(len(buffer.current_line))


def page_down(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_line(buffer.cursor_line + buffer.config.page_size)


def page_up(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.move_line(buffer.cursor_line - buffer.config.page_size)


def quit_editor(buffer: "EditBuffer", unit: str) -> None:
    del unit
    buffer.stop()


__all__ = [
    "back",
    "forward",
    "next_line",
    "prev_line",
    "line_start",
    "line_end",
    "page_down",
    "page_up",
    "quit_editor",
]
