"""Modal terminal text editor: line buffer plus Normal/Insert/Command state machine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "host",
    "keymaps",
    "modes",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
