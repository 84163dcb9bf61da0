"""Minimal raw-terminal line editor."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "keymaps",
    "render",
    "runtime",
]

__version__ = "0.1.0"
