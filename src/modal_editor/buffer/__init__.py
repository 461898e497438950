"""Text buffer: line document, cursor state, and renderer snapshots."""

from .buffer import BufferView, TextBuffer, Transaction
from .document import BufferDocument
from .state import BufferState, Cursor, Direction
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Direction",
    "TextBuffer",
    "BufferView",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "clamp_cursor",
    "ensure_cursor",
]
