"""Insert mode: printable keys are typed into the buffer."""

from __future__ import annotations

from modal_editor.config import EditorMode

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode, printable_text


class InsertMode(KeymapMode):
    name = EditorMode.INSERT

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")

        self.context.buffer.insert_char(text)
        return ModeResult(consumed=True, status="insert_char")
