from __future__ import annotations

import os
import signal
import termios

import pytest

from rawedit.adapters.terminal import RawTerminal, TerminalGeometry
from rawedit.adapters.terminal import rawmode


class PipeStream:
    def __init__(self, fd: int) -> None:
        self._fd = fd

    def fileno(self) -> int:
        return self._fd


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def fake_tty(monkeypatch):
    """Pretend the pipe is a TTY and record every attribute change."""

    original_lflag = termios.ECHO | termios.ICANON | termios.ISIG
    calls: list[tuple[int, int, list]] = []

    def tcgetattr(fd: int) -> list:
        cc = [0] * 32
        return [0, 0, 0, original_lflag, 0, 0, cc]

    def tcsetattr(fd: int, when: int, attrs: list) -> None:
        calls.append((fd, when, attrs))

    monkeypatch.setattr(rawmode.os, "isatty", lambda fd: True)
    monkeypatch.setattr(rawmode.termios, "tcgetattr", tcgetattr)
    monkeypatch.setattr(rawmode.termios, "tcsetattr", tcsetattr)
    return original_lflag, calls


def test_enter_clears_echo_and_canonical_but_keeps_isig(pipe, fake_tty) -> None:
    original_lflag, calls = fake_tty
    terminal = RawTerminal(PipeStream(pipe[0]))

    with terminal:
        assert terminal.active is True
        fd, when, attrs = calls[0]
        assert fd == pipe[0]
        assert when == termios.TCSANOW
        assert attrs[3] & termios.ECHO == 0
        assert attrs[3] & termios.ICANON == 0
        assert attrs[3] & termios.ISIG
        assert attrs[6][termios.VMIN] == 1
        assert attrs[6][termios.VTIME] == 0

    assert terminal.active is False
    assert calls[-1][2][3] == original_lflag


def test_restore_runs_when_block_raises(pipe, fake_tty) -> None:
    original_lflag, calls = fake_tty
    previous_handler = signal.getsignal(signal.SIGTERM)
    terminal = RawTerminal(PipeStream(pipe[0]))

    with pytest.raises(KeyboardInterrupt):
        with terminal:
            assert signal.getsignal(signal.SIGTERM) is rawmode._raise_system_exit
            raise KeyboardInterrupt

    assert terminal.active is False
    assert calls[-1][2][3] == original_lflag
    assert signal.getsignal(signal.SIGTERM) == previous_handler


def test_restore_is_idempotent(pipe, fake_tty) -> None:
    _, calls = fake_tty
    terminal = RawTerminal(PipeStream(pipe[0]))

    with terminal:
        pass
    terminal.restore()

    assert len(calls) == 2


def test_sigterm_handler_raises_system_exit() -> None:
    with pytest.raises(SystemExit) as excinfo:
        rawmode._raise_system_exit(signal.SIGTERM, None)

    assert excinfo.value.code == 128 + signal.SIGTERM


def test_non_tty_input_skips_raw_mode(pipe, monkeypatch) -> None:
    def fail(*_args):
        raise AssertionError("termios must not be touched for a pipe")

    monkeypatch.setattr(rawmode.termios, "tcsetattr", fail)
    terminal = RawTerminal(PipeStream(pipe[0]))

    with terminal:
        assert terminal.active is False


def test_read_unit_returns_single_bytes_then_eof(pipe) -> None:
    read_fd, write_fd = pipe
    os.write(write_fd, b"a\n\xe9")
    os.close(write_fd)
    terminal = RawTerminal(PipeStream(read_fd))

    units = [terminal.read_unit() for _ in range(4)]

    assert units == ["a", "\n", "\xe9", ""]


def test_geometry_reports_columns_and_rows(monkeypatch) -> None:
    monkeypatch.setenv("COLUMNS", "100")
    monkeypatch.setenv("LINES", "40")

    assert TerminalGeometry()() == (100, 40)
