"""Executable Textual app hosting an editor session."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_editor.adapters.textual.app"
    ) from exc

from modal_editor.buffer import BufferMirror
from modal_editor.config import MODE_CONFIGS, EditorMode
from modal_editor.runtime import telemetry
from modal_editor.session import EXIT_OK, EXIT_STARTUP_FAILURE, EditorSession
from modal_editor.storage import LoadError

from .controller import TEXTUAL_KEY_NAMES, TextualEditorAdapter, TextualUIHooks

GUTTER_WIDTH = 4


@dataclass
class UIState:
    status_text: str = ""
    command_text: str = ""
    scroll_offset: int = 0


class ModalEditorApp(App[None]):
    """Full-screen editor: numbered buffer view, status bar, command line."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $primary-darken-2;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		padding: 0 1;
	}
	"""

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self._state = UIState()
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._command_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            request_exit=self._request_exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self._update_buffer(self.session.pull_buffer())

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key, text, modifiers = self._normalize_key(event)
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget is None:
            return
        height = max(1, self._buffer_widget.size.height)
        row, col = mirror.cursor
        offset = self._state.scroll_offset
        if row < offset:
            offset = row
        elif row >= offset + height:
            offset = row - height + 1
        self._state.scroll_offset = offset
        self._buffer_widget.update(render_lines(mirror, offset, height))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.styles.background = MODE_CONFIGS[
                self.session.mode
            ].bg_color
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        if self._command_widget:
            in_command = self.session.mode is EditorMode.COMMAND
            self._command_widget.update(f":{command}" if in_command else "")

    def _request_exit(self, code: int) -> None:
        self.exit(return_code=code)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("modal_editor.ui").debug(line)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Tuple[str, Optional[str], Tuple[str, ...]]:
        key = event.key
        if key in TEXTUAL_KEY_NAMES:
            return (key, None, ())
        character = event.character
        if character and len(character) == 1 and character.isprintable():
            return (character, character, ())
        return (key, None, ())


def render_lines(mirror: BufferMirror, offset: int, height: int) -> Text:
    """Numbered view of ``height`` lines starting at ``offset``, cursor inverted."""

    row, col = mirror.cursor
    output = Text(no_wrap=True, overflow="ellipsis")
    for index, line in enumerate(mirror.lines[offset : offset + height], offset):
        if index > offset:
            output.append("\n")
        output.append(f"{index + 1:>{GUTTER_WIDTH}} │ ", style="bold blue")
        if index != row:
            output.append(line)
            continue
        output.append(line[:col])
        output.append(line[col : col + 1] or " ", style="reverse")
        output.append(line[col + 1 :])
    return output


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modal-editor", description="Edit a file with a modal terminal editor."
    )
    parser.add_argument("path", help="File to edit (created on first save)")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="tui",
        help="Telemetry preset (default: tui, console logging disabled)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    try:
        session = EditorSession.open(args.path)
    except LoadError as exc:
        print(f"modal-editor: {exc}", file=sys.stderr)
        return EXIT_STARTUP_FAILURE

    app = ModalEditorApp(session)
    app.run()
    code: Any = app.return_code
    return EXIT_OK if code is None else int(code)


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
