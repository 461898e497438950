"""Mode-switching actions shared across modes."""

from __future__ import annotations

from modal_editor.config import EditorMode
from modal_editor.keymaps import ResolutionMatch
from modal_editor.modes.base_mode import ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT, message="enter_insert"
    )


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_insert")


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.host.set_status("")
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, message="enter_command"
    )


def request_quit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.host.request_quit()
    context.bus.emit("command.quit", {"source": "normal"})
    return ModeResult(consumed=True, status="quit", message="quit")


__all__ = [
    "enter_insert_mode",
    "exit_to_normal_mode",
    "enter_command_mode",
    "request_quit",
]
