"""Scoped raw-mode acquisition for the controlling terminal (POSIX)."""

from __future__ import annotations

import atexit
import os
import signal
import sys
import termios
from contextlib import AbstractContextManager
from typing import Any, List, Optional, TextIO

from rawedit.config import FILE_ENCODING
from rawedit.runtime import telemetry


def _raise_system_exit(signum: int, frame: object) -> None:
    del frame
    raise SystemExit(128 + signum)


class RawTerminal(AbstractContextManager["RawTerminal"]):
    """Disable echo and line buffering for the lifetime of a ``with`` block.

    ``ISIG`` is left alone so Ctrl-C still raises ``KeyboardInterrupt``.
    ``SIGTERM`` is turned into ``SystemExit`` while raw mode is held, so every
    exit path unwinds through ``restore``. An ``atexit`` hook is the last
    line of restoration if the block is never left normally.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdin
        self._fd = self._stream.fileno()
        self._saved: Optional[List[Any]] = None
        self._old_sigterm: Any = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def __enter__(self) -> "RawTerminal":
        if not os.isatty(self._fd):
            telemetry.record_event(
                "terminal.not_a_tty", level="warning", data={"fd": self._fd}
            )
            return self

        self._saved = termios.tcgetattr(self._fd)
        raw = termios.tcgetattr(self._fd)
        raw[3] &= ~(termios.ECHO | termios.ICANON)
        raw[6][termios.VMIN] = 1
        raw[6][termios.VTIME] = 0
        termios.tcsetattr(self._fd, termios.TCSANOW, raw)

        self._old_sigterm = signal.signal(signal.SIGTERM, _raise_system_exit)
        atexit.register(self.restore)
        telemetry.record_event("terminal.raw_enter", data={"fd": self._fd})
        return self

    def restore(self) -> None:
        """Put back the saved attributes. Safe to call more than once."""

        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        termios.tcsetattr(self._fd, termios.TCSANOW, saved)
        signal.signal(signal.SIGTERM, self._old_sigterm)
        atexit.unregister(self.restore)
        telemetry.record_event("terminal.raw_exit", data={"fd": self._fd})

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False

    def read_unit(self) -> str:
        """Block for the next byte; ``""`` means end of input."""

        data = os.read(self._fd, 1)
        return data.decode(FILE_ENCODING)


__all__ = ["RawTerminal"]
