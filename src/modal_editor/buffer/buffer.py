"""Text buffer façade combining the line document with its cursor."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional, Sequence

from modal_editor.runtime import telemetry

from .document import LINE_TERMINATORS, BufferDocument
from .state import BufferState, Cursor, Direction
from .sync import BufferMirror
from .validation import clamp_cursor, ensure_cursor


@dataclass(slots=True)
class BufferView:
    version: int
    lines: Sequence[str]
    cursor: Cursor
    dirty: bool


class TextBuffer:
    """Document lines plus cursor, with primitive mode-agnostic edits.

    Every edit keeps ``0 <= row < line_count`` and
    ``0 <= column <= len(lines[row])``. None of the edit operations raise.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        ensure_cursor(self.document, self.state.cursor)

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "TextBuffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_bytes(cls, content: bytes, *, name: str = "default") -> "TextBuffer":
        buffer = cls(name=name)
        buffer.load(content)
        return buffer

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    def set_cursor(self, row: int, col: int) -> None:
        """Place the cursor, raising ``BufferValidationError`` when out of range."""

        ensure_cursor(self.document, (row, col))
        self.state.set_cursor(row, col)

    def mark_clean(self) -> None:
        self.document.dirty = False

    # -- movement -----------------------------------------------------------

    def move_cursor(self, direction: Direction) -> Cursor:
        with Transaction(self, f"move_{direction.value}"):
            row, col = self.state.cursor
            if direction is Direction.UP:
                row -= 1
            elif direction is Direction.DOWN:
                row += 1
            elif direction is Direction.LEFT:
                col -= 1
            elif direction is Direction.RIGHT:
                col += 1
            self.state.set_cursor(*clamp_cursor(self.document, row, col))
        return self.state.cursor

    # -- edits --------------------------------------------------------------

    def insert_char(self, char: str) -> Cursor:
        """Insert one character at the cursor.

        Anything other than a single character, and line terminators, are
        ignored: lines are split with ``insert_newline`` only.
        """

        if len(char) != 1 or char in LINE_TERMINATORS:
            return self.state.cursor
        with Transaction(self, "insert_char"):
            row, col = self.state.cursor
            line = self.document.get_line(row)
            self.document.set_line(row, line[:col] + char + line[col:])
            self.state.set_cursor(row, col + 1)
        return self.state.cursor

    def insert_newline(self) -> Cursor:
        with Transaction(self, "insert_newline"):
            row, col = self.state.cursor
            line = self.document.get_line(row)
            self.document.update_lines(row, row + 1, [line[:col], line[col:]])
            self.state.set_cursor(row + 1, 0)
        return self.state.cursor

    def delete_before_cursor(self) -> Cursor:
        row, col = self.state.cursor
        if row == 0 and col == 0:
            return self.state.cursor

        with Transaction(self, "delete_before_cursor"):
            line = self.document.get_line(row)
            if col > 0:
                self.document.set_line(row, line[: col - 1] + line[col:])
                self.state.set_cursor(row, col - 1)
            else:
                previous = self.document.get_line(row - 1)
                self.document.update_lines(row - 1, row + 1, [previous + line])
                self.state.set_cursor(row - 1, len(previous))
        return self.state.cursor

    # -- load / save --------------------------------------------------------

    def load(self, content: bytes) -> None:
        """Replace the whole document with ``content`` and reset the cursor."""

        with Transaction(self, "load") as tx:
            version = self.document.version
            self.document = BufferDocument.from_bytes(content)
            self.document.version = version + 1
            self.state.set_cursor(0, 0)
            tx.annotate("lines", self.document.line_count)

    def serialize(self) -> bytes:
        return self.document.to_bytes()

    # -- renderer views -----------------------------------------------------

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            lines=self.document.snapshot(),
            cursor=self.state.cursor,
            dirty=self.document.dirty,
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.to_text(),
            lines=self.document.snapshot(),
            cursor=self.state.cursor,
            dirty=self.document.dirty,
            attributes=dict(attributes or {}),
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one buffer edit in a telemetry span."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self.cursor_before: Cursor = buffer.state.cursor

    def __enter__(self) -> "Transaction":
        self.cursor_before = self.buffer.state.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name, "cursor": self.cursor_before},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def annotate(self, key: str, value: object) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self.annotate("cursor_after", self.buffer.state.cursor)
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
