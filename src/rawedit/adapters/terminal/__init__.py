"""Raw-terminal host for the editor: raw mode, geometry, loop, and CLI."""

from .controller import EditorSession, UnitReader
from .geometry import TerminalGeometry
from .rawmode import RawTerminal

__all__ = ["EditorSession", "UnitReader", "TerminalGeometry", "RawTerminal"]
