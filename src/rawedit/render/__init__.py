"""Screen synchronization for the edit buffer."""

from .renderer import Renderer, SizeProvider, cursor_position
from .strategies import STRATEGIES, ClearStrategy, DiffStrategy, display_text

__all__ = [
    "Renderer",
    "SizeProvider",
    "cursor_position",
    "ClearStrategy",
    "DiffStrategy",
    "STRATEGIES",
    "display_text",
]
