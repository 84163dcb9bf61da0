"""Read/apply/render loop wiring an EditBuffer to a Renderer."""

from __future__ import annotations

from typing import Callable, Optional

from rawedit.buffer import BufferDelta, EditBuffer
from rawedit.keymaps import describe_unit
from rawedit.render import Renderer
from rawedit.runtime import telemetry

UnitReader = Callable[[], str]


class EditorSession:
    """Drives one buffer until it stops running or input runs dry.

    ``read_unit`` blocks for the next input unit and returns ``""`` at EOF.
    """

    def __init__(
        self, buffer: EditBuffer, renderer: Renderer, read_unit: UnitReader
    ) -> None:
        self.buffer = buffer
        self.renderer = renderer
        self._read_unit = read_unit
        self.logger = telemetry.get_logger("rawedit.session")
        self.keystrokes = 0

    def start(self) -> None:
        telemetry.record_event(
            "session.start",
            data={
                "buffer": self.buffer.name,
                "lines": self.buffer.line_count,
                "strategy": self.renderer.strategy_name,
            },
        )
        self.buffer.adjust_viewport(self.renderer.height())
        self.renderer.sync(self.buffer)

    def step(self, unit: str) -> BufferDelta:
        with telemetry.span(
            "session::step",
            component="session",
            metadata={"unit": describe_unit(unit)},
        ):
            delta = self.buffer.apply(unit)
            scrolled = self.buffer.adjust_viewport(self.renderer.height())
            self.renderer.sync(self.buffer, delta, scrolled)
        self.keystrokes += 1
        return delta

    def run(self) -> int:
        self.start()
        reason: Optional[str] = None
        while self.buffer.running:
            unit = self._read_unit()
            if not unit:
                reason = "eof"
                break
            self.step(unit)
        self.renderer.park_cursor()
        telemetry.record_event(
            "session.stop",
            data={
                "buffer": self.buffer.name,
                "keystrokes": self.keystrokes,
                "reason": reason or "quit",
            },
        )
        return 0


__all__ = ["EditorSession", "UnitReader"]
