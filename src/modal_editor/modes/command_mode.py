"""Command-line mode: collects ``:`` command text until Enter or Esc."""

from __future__ import annotations

from typing import Optional

from modal_editor.config import EditorMode

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import KeymapMode, printable_text


class CommandMode(KeymapMode):
    name = EditorMode.COMMAND

    def on_enter(self, previous: Optional[EditorMode]) -> None:
        del previous
        self.context.command_line = ""
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: Optional[EditorMode]) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.context.command_line)
        self.context.command_line = ""

    @property
    def current_command(self) -> str:
        return self.context.command_line

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = printable_text(key)
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")

        self.context.command_line += text
        return ModeResult(consumed=True, status="editing")
