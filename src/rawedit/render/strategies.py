"""Redraw strategies used internally by ``Renderer``.

Both guarantee that no glyph from an earlier frame survives on screen;
they differ in how many bytes they write to get there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from rawedit.buffer import BufferDelta, BufferView

    from .renderer import Renderer


class RedrawStrategy(Protocol):
    name: str

    def forget(self) -> None:
        """The screen was blanked; drop any memory of earlier frames."""
        ...

    def draw(self, lines: Sequence[str], viewport_offset: int) -> None:
        ...

    def update(
        self, view: "BufferView", delta: Optional["BufferDelta"], scrolled: bool
    ) -> None:
        ...


PLACEHOLDER = "?"


def display_text(line: str, width: int) -> str:
    """Clip ``line`` to ``width`` cells, showing control characters as ``?``.

    Buffer content is kept byte-exact; only what reaches the terminal is
    filtered, one cell per character, so columns still line up.
    """

    text = line[:width]
    if text.isprintable():
        return text
    return "".join(char if char.isprintable() else PLACEHOLDER for char in text)


def visible_rows(
    lines: Sequence[str], viewport_offset: int, width: int, height: int
) -> List[str]:
    return [
        display_text(line, width)
        for line in lines[viewport_offset : viewport_offset + height]
    ]


class DiffStrategy:
    """Rewrite only rows that changed, blanking any stale tail."""

    name = "diff"

    def __init__(self, renderer: "Renderer") -> None:
        self.renderer = renderer
        self._previous: List[str] = []

    def forget(self) -> None:
        self._previous = []

    def draw(self, lines: Sequence[str], viewport_offset: int) -> None:
        renderer = self.renderer
        rows = visible_rows(
            lines, viewport_offset, renderer.width(), renderer.height()
        )
        for index in range(max(len(rows), len(self._previous))):
            new = rows[index] if index < len(rows) else ""
            old = self._previous[index] if index < len(self._previous) else ""
            if new == old:
                continue
            stale = max(0, len(old) - len(new))
            renderer.move_cursor(1, index + 1)
            renderer.write(new + " " * stale)
        self._previous = rows

    def update(
        self, view: "BufferView", delta: Optional["BufferDelta"], scrolled: bool
    ) -> None:
        del delta, scrolled
        self.draw(view.lines, view.viewport_offset)


class ClearStrategy:
    """Full clear on structural change, otherwise patch the cursor row only."""

    name = "clear"

    def __init__(self, renderer: "Renderer") -> None:
        self.renderer = renderer

    def forget(self) -> None:
        return None

    def draw(self, lines: Sequence[str], viewport_offset: int) -> None:
        renderer = self.renderer
        rows = visible_rows(
            lines, viewport_offset, renderer.width(), renderer.height()
        )
        for index, text in enumerate(rows):
            if not text:
                continue
            renderer.move_cursor(1, index + 1)
            renderer.write(text)

    def update(
        self, view: "BufferView", delta: Optional["BufferDelta"], scrolled: bool
    ) -> None:
        renderer = self.renderer
        if scrolled or delta is None or delta.structural:
            renderer.full_clear()
            self.draw(view.lines, view.viewport_offset)
            return

        line, _ = view.cursor
        width = renderer.width()
        text = display_text(view.lines[line], width)
        stale = 0
        if delta.cursor_before[0] == line:
            stale = max(0, min(delta.line_length_before, width) - len(text))
        if not text and not stale:
            return
        renderer.move_cursor(1, line - view.viewport_offset + 1)
        renderer.write(text + " " * stale)


STRATEGIES = {
    DiffStrategy.name: DiffStrategy,
    ClearStrategy.name: ClearStrategy,
}


__all__ = [
    "ClearStrategy",
    "DiffStrategy",
    "PLACEHOLDER",
    "RedrawStrategy",
    "STRATEGIES",
    "display_text",
    "visible_rows",
]
