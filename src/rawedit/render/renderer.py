"""Terminal renderer: turns buffer snapshots into cursor-addressed output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Sequence, TextIO, Tuple

from rawedit.runtime import telemetry

from .strategies import STRATEGIES, RedrawStrategy

if TYPE_CHECKING:  # pragma: no cover
    from rawedit.buffer import BufferDelta, EditBuffer


SizeProvider = Callable[[], Tuple[int, int]]

ESC = "\x1b"


def cursor_position(column: int, row: int) -> str:
    return f"{ESC}[{row};{column}H"


class Renderer:
    """Owns presentation state only; document content stays in the buffer.

    ``geometry`` returns the raw ``(columns, rows)`` of the terminal. The
    usable area is one less in each direction so nothing is ever written to
    the last row or column.
    """

    def __init__(
        self,
        stream: TextIO,
        geometry: SizeProvider,
        *,
        strategy: str = "diff",
    ) -> None:
        try:
            strategy_cls = STRATEGIES[strategy]
        except KeyError as exc:
            raise ValueError(
                f"Unknown render strategy '{strategy}', expected one of {tuple(STRATEGIES)}"
            ) from exc
        self.stream = stream
        self._geometry = geometry
        self._strategy: RedrawStrategy = strategy_cls(self)
        self._frame_size: Optional[Tuple[int, int]] = None
        self._full_redraw_pending = True

    @property
    def strategy_name(self) -> str:
        return self._strategy.name

    def width(self) -> int:
        columns, _ = self._geometry()
        return max(1, columns - 1)

    def height(self) -> int:
        _, rows = self._geometry()
        return max(1, rows - 1)

    def write(self, text: str) -> None:
        self.stream.write(text)

    def move_cursor(self, visual_column: int, visual_row: int) -> None:
        self.write(cursor_position(visual_column, visual_row))

    def full_clear(self) -> None:
        blank = " " * self.width()
        for row in range(1, self.height() + 1):
            self.move_cursor(1, row)
            self.write(blank)
        self.move_cursor(1, 1)
        self._strategy.forget()

    def draw(self, lines: Sequence[str], viewport_offset: int) -> None:
        self._strategy.draw(lines, viewport_offset)

    def sync(
        self,
        buffer: "EditBuffer",
        delta: Optional["BufferDelta"] = None,
        scrolled: bool = False,
    ) -> None:
        """Bring the screen in line with ``buffer`` and park the cursor on it."""

        view = buffer.snapshot()
        with telemetry.span(
            "render::sync",
            component="render",
            metadata={"strategy": self._strategy.name, "scrolled": scrolled},
        ):
            size = self._geometry()
            if size != self._frame_size:
                self._frame_size = size
                self._full_redraw_pending = True

            if self._full_redraw_pending:
                self._full_redraw_pending = False
                self.full_clear()
                self.draw(view.lines, view.viewport_offset)
            else:
                self._strategy.update(view, delta, scrolled)

            line, column = view.cursor
            self.move_cursor(column + 1, line - view.viewport_offset + 1)
            self.stream.flush()

    def park_cursor(self) -> None:
        """Leave the hardware cursor on the row below the editing area."""

        self.move_cursor(1, self.height() + 1)
        self.stream.flush()


__all__ = ["Renderer", "SizeProvider", "cursor_position"]
