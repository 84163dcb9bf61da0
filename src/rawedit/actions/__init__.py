"""Editing and movement verbs dispatched by the keymap."""

from .editing import (
    backspace,
    insert_literal,
    insert_tab,
    kill_line,
    newline,
    open_line,
    save,
)
from .movement import (
    back,
    forward,
    line_end,
    line_start,
    next_line,
    page_down,
    page_up,
    prev_line,
    quit_editor,
)

__all__ = [
    "insert_literal",
    "insert_tab",
    "newline",
    "open_line",
    "backspace",
    "kill_line",
    "save",
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
