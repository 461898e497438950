"""Textual adapter that wires an EditorSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, Optional

from modal_editor.buffer import BufferMirror
from modal_editor.config import MODE_CONFIGS
from modal_editor.modes import KeyInput, ModeResult
from modal_editor.session import EditorSession

# Textual key names mapped onto the logical keys the modes understand.
TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
}

# Mode bus events forwarded to ``TextualUIHooks.handle_event``.
BUS_EVENTS = (
    "mode.switch",
    "command.start",
    "command.end",
    "command.submit",
    "command.write",
    "command.quit",
    "command.error",
)


def _ignore(*_args: object) -> None:
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Widget update callbacks; only ``update_buffer`` is mandatory."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _ignore
    show_command: Callable[[str], None] = _ignore
    handle_event: Callable[[str, object | None], None] = _ignore
    request_exit: Callable[[int], None] = _ignore
    log: Callable[[str], None] = _ignore


def status_line(session: EditorSession) -> str:
    """``-- MODE -- row:col`` plus a ``[+]`` marker and the status message."""

    row, col = session.buffer.cursor
    label = MODE_CONFIGS[session.mode].label
    parts = [f"-- {label} -- {row + 1}:{col + 1}"]
    if session.buffer.dirty:
        parts.append("[+]")
    if session.status_message:
        parts.append(f"-- {session.status_message}")
    return " ".join(parts)


class TextualEditorAdapter:
    """Feeds Textual key events into an EditorSession and pushes redraws.

    After every key the buffer view, status bar and command line are
    refreshed from the session. Once the session requests a quit the adapter
    asks the app to exit with the session's exit code.
    """

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        for event in BUS_EVENTS:
            session.bus.subscribe(event, partial(self._forward_event, event))
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Dispatch one Textual key; named keys never carry text."""

        logical = TEXTUAL_KEY_NAMES.get(key)
        key_input = KeyInput(
            key=logical or key,
            text=None if logical else text,
            modifiers=tuple(str(mod).lower() for mod in modifiers),
        )
        self._trace("key ->", key=key_input.key, text=key_input.text)
        result = self.session.handle_key(key_input)
        self._trace(
            "result <-",
            status=result.status,
            consumed=result.consumed,
            switch_to=result.switch_to.value if result.switch_to else None,
        )

        self._refresh()
        if self.session.quit_requested:
            self.hooks.request_exit(self.session.exit_code or 0)
        return result

    def _forward_event(self, name: str, payload: object | None) -> None:
        self._trace("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.session.pull_buffer())
        self.hooks.update_status(status_line(self.session))
        self.hooks.show_command(self.session.command_line)

    def _trace(self, prefix: str, **fields: object) -> None:
        session = self.session
        state = {
            "mode": session.mode.value,
            "cursor": session.buffer.cursor,
            "version": session.buffer.document.version,
        }
        state.update((name, value) for name, value in fields.items() if value is not None)
        self.hooks.log(
            " ".join([prefix, *(f"{name}={value!r}" for name, value in state.items())])
        )


__all__ = [
    "BUS_EVENTS",
    "TEXTUAL_KEY_NAMES",
    "TextualEditorAdapter",
    "TextualUIHooks",
    "status_line",
]
