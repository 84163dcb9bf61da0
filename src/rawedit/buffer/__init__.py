"""Buffer abstractions: document storage, cursor state, and file I/O."""

from .buffer import BufferDelta, BufferView, EditBuffer, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor
from .storage import StorageError, load_lines, save_lines
from .validation import BufferValidationError, check_invariants, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "EditBuffer",
    "BufferDelta",
    "BufferView",
    "Transaction",
    "BufferValidationError",
    "StorageError",
    "check_invariants",
    "ensure_cursor",
    "load_lines",
    "save_lines",
]
