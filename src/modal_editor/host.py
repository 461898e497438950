"""Protocol for the services modes ask of the surrounding editor."""

from __future__ import annotations

from typing import Protocol

from modal_editor.buffer import TextBuffer


class EditorHost(Protocol):
    """File I/O and lifecycle requests issued by command actions.

    ``write_buffer`` raises :class:`modal_editor.storage.SaveError` when the
    target cannot be written; the buffer must be left untouched in that case.
    """

    def write_buffer(self, buffer: TextBuffer) -> int:
        """Persist ``buffer`` to the file the editor was opened with."""
        ...

    def request_quit(self) -> None:
        """Ask the event loop to stop after the current key event."""
        ...

    def set_status(self, message: str) -> None:
        """Show ``message`` in the status bar until replaced."""
        ...


__all__ = ["EditorHost"]
