"""Edit buffer façade combining document, cursor state, and key dispatch."""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from dataclasses import dataclass
from functools import partial
from typing import Callable, ContextManager, Iterable, Optional, Sequence

from rawedit.config import EditorConfig
from rawedit.keymaps import (
    ActionRef,
    KeymapRegistry,
    KeymapResolver,
    load_default_keymaps,
)
from rawedit.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor
from .storage import load_lines, save_lines
from .validation import ensure_cursor

Saver = Callable[[Sequence[str]], None]


@dataclass(slots=True)
class BufferView:
    """Read-only frame of the buffer handed to renderers."""

    lines: tuple[str, ...]
    cursor: Cursor
    viewport_offset: int


@dataclass(slots=True)
class BufferDelta:
    """What a single ``apply`` call did to the buffer."""

    action: str
    unit: str
    version: int
    cursor_before: Cursor
    cursor_after: Cursor
    line_count_before: int
    line_count_after: int
    line_length_before: int

    @property
    def structural(self) -> bool:
        return self.line_count_before != self.line_count_after


def build_default_resolver() -> KeymapResolver:
    registry = KeymapRegistry(logger_name="rawedit.keymaps")
    load_default_keymaps(registry)
    return KeymapResolver(registry, logger_name="rawedit.keymaps")


class EditBuffer:
    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        name: str = "default",
        path: str | os.PathLike[str] | None = None,
        saver: Optional[Saver] = None,
        config: Optional[EditorConfig] = None,
        resolver: Optional[KeymapResolver] = None,
        cursor: Cursor = (0, 0),
    ) -> None:
        self.name = name
        self.path = path
        self.config = config or EditorConfig()
        self.document = BufferDocument.from_lines(lines if lines is not None else [""])
        self.state = BufferState()
        self.state.set_cursor(*ensure_cursor(self.document, cursor))
        if saver is None and path is not None:
            saver = partial(_save_to, path)
        self._saver = saver
        self.resolver = resolver or build_default_resolver()

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike[str],
        *,
        config: Optional[EditorConfig] = None,
        resolver: Optional[KeymapResolver] = None,
    ) -> "EditBuffer":
        """Load ``path``; a file that does not exist yet starts empty."""

        try:
            lines = load_lines(path)
        except FileNotFoundError:
            telemetry.record_event("storage.new_file", data={"path": os.fspath(path)})
            lines = [""]
        return cls(
            lines,
            name=os.path.basename(os.fspath(path)) or "default",
            path=path,
            config=config,
            resolver=resolver,
        )

    # -- read access ---------------------------------------------------------

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def current_line(self) -> str:
        return self.document.get_line(self.state.cursor_line)

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def cursor_line(self) -> int:
        return self.state.cursor_line

    @property
    def cursor_column(self) -> int:
        return self.state.cursor_column

    @property
    def viewport_offset(self) -> int:
        return self.state.viewport_offset

    @property
    def running(self) -> bool:
        return self.state.running

    def snapshot(self) -> BufferView:
        return BufferView(
            lines=tuple(self.document.snapshot()),
            cursor=self.state.cursor,
            viewport_offset=self.state.viewport_offset,
        )

    # -- input dispatch ------------------------------------------------------

    def apply(self, unit: str) -> BufferDelta:
        """Apply one input unit through the keymap; never raises for a unit."""

        action = self.resolver.resolve(unit).action
        with Transaction(self, action, unit) as tx:
            action(self, unit)
        return tx.delta()

    def adjust_viewport(self, visible_height: int) -> bool:
        """Scroll so the cursor line is visible; report whether it moved."""

        height = max(1, visible_height)
        line = self.state.cursor_line
        offset = self.state.viewport_offset
        if line + 1 - offset > height:
            offset = line + 1 - height
        elif line - offset < 0:
            offset = line
        changed = offset != self.state.viewport_offset
        self.state.viewport_offset = offset
        return changed

    # -- editing primitives used by actions ----------------------------------

    def insert_text(self, text: str) -> None:
        line = self.current_line
        column = self.state.cursor_column
        self.document.set_line(
            self.state.cursor_line, line[:column] + text + line[column:]
        )
        self.state.cursor_column = column + len(text)

    def delete_backward(self) -> None:
        column = self.state.cursor_column
        if column == 0:
            return
        line = self.current_line
        self.document.set_line(self.state.cursor_line, line[: column - 1] + line[column:])
        self.state.cursor_column = column - 1

    def split_line(self) -> None:
        line = self.current_line
        column = self.state.cursor_column
        self.document.set_line(self.state.cursor_line, line[:column])
        self.state.cursor_line += 1
        self.document.insert_line(self.state.cursor_line, line[column:])
        self.state.cursor_column = 0

    def open_line(self) -> None:
        self.document.insert_line(self.state.cursor_line, "")
        self.state.cursor_column = 0

    def kill_line(self) -> None:
        if not self.document.delete_line(self.state.cursor_line):
            return
        self.state.cursor_column = 0
        if self.state.cursor_line >= self.document.line_count:
            self.state.cursor_line -= 1

    def move_column(self, column: int) -> None:
        self.state.cursor_column = max(0, min(len(self.current_line), column))

    def move_line(self, line: int) -> None:
        """Jump to ``line`` (clamped), keeping the column inside the new line."""

        self.state.cursor_line = max(0, min(self.document.line_count - 1, line))
        self.move_column(self.state.cursor_column)

    def stop(self) -> None:
        self.state.running = False

    def save(self) -> None:
        if self._saver is None:
            telemetry.record_event(
                "storage.save_skipped",
                level="warning",
                data={"buffer": self.name, "reason": "no path bound"},
            )
            return
        try:
            self._saver(self.document.snapshot())
        except OSError as exc:
            telemetry.record_event(
                "storage.save_failed",
                level="error",
                data={"buffer": self.name, "error": str(exc)},
            )
            return
        self.document.mark_clean()


class Transaction(AbstractContextManager["Transaction"]):
    """Run one action inside a ``buffer::<name>`` span and describe its effect."""

    def __init__(self, buffer: EditBuffer, action: ActionRef, unit: str) -> None:
        self.buffer = buffer
        self.action = action
        self.unit = unit
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_cursor: Cursor = (0, 0)
        self._before_count = 0
        self._before_length = 0

    def __enter__(self) -> "Transaction":
        self._before_cursor = self.buffer.cursor
        self._before_count = self.buffer.line_count
        self._before_length = len(self.buffer.current_line)
        self._span_cm = telemetry.span(
            name=f"buffer::{self.action.telemetry_name}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def delta(self) -> BufferDelta:
        return BufferDelta(
            action=self.action.id,
            unit=self.unit,
            version=self.buffer.document.version,
            cursor_before=self._before_cursor,
            cursor_after=self.buffer.cursor,
            line_count_before=self._before_count,
            line_count_after=self.buffer.line_count,
            line_length_before=self._before_length,
        )


def _save_to(path: str | os.PathLike[str], lines: Sequence[str]) -> None:
    save_lines(lines, path)
