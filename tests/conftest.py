"""Shared fixtures and a tiny terminal emulator for renderer tests."""

from __future__ import annotations

import io
import re
from typing import Callable, Iterable, List, Tuple

import pytest

from rawedit.buffer import EditBuffer
from rawedit.render import Renderer

_CUP = re.compile(r"\x1b\[(\d+);(\d+)H")


class VirtualScreen:
    """Interprets the renderer's output: cursor positioning plus plain text."""

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = columns
        self.rows = rows
        self.grid: List[List[str]] = [[" "] * columns for _ in range(rows)]
        self.cursor: Tuple[int, int] = (1, 1)  # (column, row), 1-indexed

    def feed(self, data: str) -> None:
        position = 0
        for match in _CUP.finditer(data):
            self._put(data[position : match.start()])
            self.cursor = (int(match.group(2)), int(match.group(1)))
            position = match.end()
        self._put(data[position:])

    def _put(self, text: str) -> None:
        assert "\x1b" not in text, f"unexpected escape sequence in {text!r}"
        assert text.isprintable(), f"control character written in {text!r}"
        column, row = self.cursor
        for char in text:
            assert 1 <= row <= self.rows, f"write outside screen at row {row}"
            assert 1 <= column <= self.columns, f"write outside screen at column {column}"
            self.grid[row - 1][column - 1] = char
            column += 1
        self.cursor = (column, row)

    def row(self, number: int) -> str:
        return "".join(self.grid[number - 1]).rstrip()

    def text_rows(self, count: int) -> List[str]:
        return [self.row(number) for number in range(1, count + 1)]


class ScreenHarness:
    """Renderer wired to a StringIO whose output is replayed on a VirtualScreen."""

    def __init__(self, columns: int, rows: int, strategy: str) -> None:
        self.size = (columns, rows)
        self.stream = io.StringIO()
        self.screen = VirtualScreen(columns, rows)
        self.renderer = Renderer(self.stream, lambda: self.size, strategy=strategy)
        self._consumed = 0

    def flush(self) -> str:
        data = self.stream.getvalue()[self._consumed :]
        self._consumed = len(self.stream.getvalue())
        self.screen.feed(data)
        return data

    def sync(self, buffer: EditBuffer, delta=None, scrolled: bool = False) -> str:
        self.renderer.sync(buffer, delta, scrolled)
        return self.flush()

    def press(self, buffer: EditBuffer, units: Iterable[str]) -> str:
        output = []
        for unit in units:
            delta = buffer.apply(unit)
            scrolled = buffer.adjust_viewport(self.renderer.height())
            output.append(self.sync(buffer, delta, scrolled))
        return "".join(output)


@pytest.fixture(params=["diff", "clear"])
def strategy(request) -> str:
    return request.param


@pytest.fixture
def make_harness() -> Callable[..., ScreenHarness]:
    def factory(columns: int = 21, rows: int = 6, strategy: str = "diff") -> ScreenHarness:
        return ScreenHarness(columns, rows, strategy)

    return factory
