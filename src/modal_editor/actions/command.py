"""Actions that edit and evaluate the ``:`` command line."""

from __future__ import annotations

from typing import Callable, Dict

from modal_editor.config import EditorMode
from modal_editor.modes.base_mode import ModeContext, ModeResult
from modal_editor.storage import SaveError

CommandHandler = Callable[[ModeContext], ModeResult]

SAVED_MESSAGE = "File saved"


def submit_command_line(context: ModeContext, match) -> ModeResult:
    """Run the command line verbatim; every outcome lands back in Normal."""

    del match
    command = context.command_line
    context.command_line = ""
    context.bus.emit("command.submit", command)
    if not command:
        return ModeResult(
            consumed=True, switch_to=EditorMode.NORMAL, status="command_empty"
        )
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, command)
    return handler(context)


def cancel_command_line(context: ModeContext, match) -> ModeResult:
    del match
    context.command_line = ""
    return ModeResult(
        consumed=True, switch_to=EditorMode.NORMAL, message="command_cancel"
    )


def delete_command_char(context: ModeContext, match) -> ModeResult:
    del match
    context.command_line = context.command_line[:-1]
    return ModeResult(consumed=True, status="editing")


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    message = f"Invalid command: {command}"
    context.host.set_status(message)
    context.bus.emit("command.error", command)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_error",
        message=message,
    )


def _handle_write(context: ModeContext) -> ModeResult:
    error = _write(context)
    if error is not None:
        return error
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_write",
        message=SAVED_MESSAGE,
    )


def _handle_quit(context: ModeContext) -> ModeResult:
    _quit(context)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_quit",
        message="quit",
    )


def _handle_wq(context: ModeContext) -> ModeResult:
    error = _write(context)
    if error is not None:
        return error
    _quit(context)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status="command_wq",
        message=SAVED_MESSAGE,
    )


def _write(context: ModeContext) -> ModeResult | None:
    """Save through the host; return a failure result instead of raising."""

    try:
        written = context.host.write_buffer(context.buffer)
    except SaveError as exc:
        message = f"Save failed: {exc}"
        context.host.set_status(message)
        context.bus.emit("command.error", message)
        return ModeResult(
            consumed=True,
            switch_to=EditorMode.NORMAL,
            status="command_write_failed",
            message=message,
        )
    context.host.set_status(SAVED_MESSAGE)
    context.bus.emit("command.write", {"bytes": written, "path": _host_path(context)})
    return None


def _quit(context: ModeContext) -> None:
    context.host.request_quit()
    context.bus.emit("command.quit", {"source": "command"})


def _host_path(context: ModeContext) -> str | None:
    path = getattr(context.host, "path", None)
    return str(path) if path is not None else None


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": _handle_write,
    "q": _handle_quit,
    "wq": _handle_wq,
}


__all__ = [
    "submit_command_line",
    "cancel_command_line",
    "delete_command_char",
    "SAVED_MESSAGE",
]
