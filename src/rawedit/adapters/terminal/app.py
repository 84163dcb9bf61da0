"""Command-line entry point hosting the editor in a raw terminal."""

from __future__ import annotations

import argparse
import io
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, TextIO

from rawedit.buffer import EditBuffer, StorageError
from rawedit.config import FILE_ENCODING, RENDER_STRATEGIES, EditorConfig
from rawedit.render import Renderer
from rawedit.runtime import telemetry

from .controller import EditorSession
from .geometry import TerminalGeometry
from .rawmode import RawTerminal


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rawedit", description="Edit a file in a raw-mode terminal."
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="File to edit; created on the first save if it does not exist",
    )
    parser.add_argument(
        "--strategy",
        choices=RENDER_STRATEGIES,
        default=None,
        help="Redraw strategy (default: $RAWEDIT_RENDER_STRATEGY or 'diff')",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default=None,
        help="Telemetry preset; logs always go to a file, never the terminal",
    )
    return parser.parse_args(argv)


@contextmanager
def _terminal_output() -> Iterator[TextIO]:
    # Bytes go out exactly as they came in: one character per byte.
    sys.stdout.flush()
    stream = io.TextIOWrapper(
        sys.stdout.buffer,
        encoding=FILE_ENCODING,
        errors="replace",
        newline="",
        write_through=True,
    )
    try:
        yield stream
    finally:
        stream.flush()
        stream.detach()


def build_buffer(path: Optional[str], config: EditorConfig) -> EditBuffer:
    if path:
        return EditBuffer.from_file(path, config=config)
    return EditBuffer(config=config)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    try:
        config = EditorConfig.from_env().with_overrides(render_strategy=args.strategy)
    except ValueError as exc:
        print(f"rawedit: {exc}", file=sys.stderr)
        return 2

    try:
        buffer = build_buffer(args.path, config)
    except StorageError as exc:
        print(f"rawedit: {exc}", file=sys.stderr)
        return 1

    with _terminal_output() as output, RawTerminal(sys.stdin) as terminal:
        renderer = Renderer(output, TerminalGeometry(), strategy=config.render_strategy)
        session = EditorSession(buffer, renderer, terminal.read_unit)
        try:
            return session.run()
        except KeyboardInterrupt:
            renderer.park_cursor()
            telemetry.record_event(
                "session.interrupted", level="warning", data={"buffer": buffer.name}
            )
            return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
