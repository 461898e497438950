"""Editor session: one file, one buffer, one mode manager."""

from __future__ import annotations

import os
from typing import Callable, Iterable, List, Optional

from modal_editor.buffer import BufferMirror, TextBuffer
from modal_editor.config import EditorMode
from modal_editor.modes import KeyInput, ModeBus, ModeContext, ModeResult
from modal_editor.modes.mode_manager import ModeManager, create_default_manager
from modal_editor.runtime import telemetry
from modal_editor.storage import read_document, write_document

Reader = Callable[[str], bytes]
Writer = Callable[[str, bytes], int]

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1


class EditorSession:
    """Binds a buffer and mode manager to the file they were opened from.

    Implements :class:`modal_editor.host.EditorHost`, so command actions save
    and quit through it. Renderers pull ``mode``, ``command_line``,
    ``status_message`` and ``pull_buffer()`` after every key event.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        buffer: Optional[TextBuffer] = None,
        reader: Reader = read_document,
        writer: Writer = write_document,
    ) -> None:
        self.path = os.fspath(path)
        self._writer = writer
        self.status_message = ""
        self.quit_requested = False
        if buffer is None:
            buffer = TextBuffer(name=os.path.basename(self.path) or self.path)
            buffer.load(reader(self.path))
        self.buffer = buffer
        self.bus = ModeBus()
        self.context = ModeContext(buffer=self.buffer, bus=self.bus, host=self)
        self.manager: ModeManager = create_default_manager(self.context)

    @classmethod
    def open(cls, path: str | os.PathLike[str], **kwargs) -> "EditorSession":
        """Open ``path``; raises ``LoadError`` when it cannot be edited."""

        session = cls(path, **kwargs)
        telemetry.record_event(
            "session.open",
            data={"path": session.path, "lines": session.buffer.line_count},
        )
        return session

    # -- EditorHost ---------------------------------------------------------

    def write_buffer(self, buffer: TextBuffer) -> int:
        written = self._writer(self.path, buffer.serialize())
        buffer.mark_clean()
        return written

    def request_quit(self) -> None:
        self.quit_requested = True
        telemetry.record_event("session.quit", data={"dirty": self.buffer.dirty})

    def set_status(self, message: str) -> None:
        self.status_message = message

    # -- input --------------------------------------------------------------

    def handle_key(self, key: KeyInput) -> ModeResult:
        if self.quit_requested:
            return ModeResult(consumed=False, status="closed")
        return self.manager.handle_key(key)

    def feed(self, keys: Iterable[KeyInput]) -> List[ModeResult]:
        """Dispatch ``keys`` in order, stopping once a quit is requested."""

        results: List[ModeResult] = []
        for key in keys:
            if self.quit_requested:
                break
            results.append(self.handle_key(key))
        return results

    # -- renderer pull ------------------------------------------------------

    @property
    def mode(self) -> EditorMode:
        return self.manager.mode

    @property
    def command_line(self) -> str:
        return self.manager.command_line

    @property
    def exit_code(self) -> Optional[int]:
        return EXIT_OK if self.quit_requested else None

    def pull_buffer(self) -> BufferMirror:
        return self.buffer.mirror(attributes={"path": self.path})


__all__ = ["EditorSession", "EXIT_OK", "EXIT_STARTUP_FAILURE"]
