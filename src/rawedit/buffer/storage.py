"""File load/save for line-oriented documents."""

from __future__ import annotations

import os
from typing import List, Sequence

from rawedit.config import FILE_ENCODING
from rawedit.runtime import telemetry


class StorageError(RuntimeError):
    """Raised when a file exists but cannot be read."""

    def __init__(self, message: str, *, path: str | os.PathLike[str] | None = None) -> None:
        super().__init__(message)
        self.path = path


def load_lines(path: str | os.PathLike[str]) -> List[str]:
    """Read ``path`` into lines with separators stripped.

    A trailing newline does not produce an extra empty line. A missing file
    raises ``FileNotFoundError``; any other OS failure becomes ``StorageError``.
    """

    with telemetry.span(
        "storage::load", component="storage", metadata={"path": os.fspath(path)}
    ):
        try:
            with open(path, "r", encoding=FILE_ENCODING, newline="") as handle:
                text = handle.read()
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}", path=path) from exc

    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    telemetry.record_event(
        "storage.loaded", data={"path": os.fspath(path), "lines": len(lines)}
    )
    return lines


def save_lines(lines: Sequence[str], path: str | os.PathLike[str]) -> None:
    """Overwrite ``path`` with every line followed by a newline."""

    with telemetry.span(
        "storage::save", component="storage", metadata={"path": os.fspath(path)}
    ):
        with open(path, "w", encoding=FILE_ENCODING, newline="") as handle:
            handle.write("".join(f"{line}\n" for line in lines))
    telemetry.record_event(
        "storage.saved", data={"path": os.fspath(path), "lines": len(lines)}
    )


__all__ = ["StorageError", "load_lines", "save_lines"]
