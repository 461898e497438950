"""Line storage for editor buffers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

DEFAULT_NEWLINE = "\n"
ENCODING = "utf-8"
# Undecodable bytes survive a load/serialize cycle unchanged.
ENCODING_ERRORS = "surrogateescape"
# Characters insert_char refuses; lines are only split by insert_newline.
LINE_TERMINATORS = frozenset({"\r", "\n"})
_LINE_BREAK = re.compile(r"\r?\n")


def detect_newline(text: str) -> str:
    """Return the terminator ``serialize`` writes back for ``text``.

    Any ``\\r\\n`` makes the document CRLF; mixed content is then normalised
    to CRLF on save.
    """

    if "\r\n" in text:
        return "\r\n"
    return DEFAULT_NEWLINE


@dataclass(slots=True)
class BufferDocument:
    """Mutable list-of-lines document.

    Always holds at least one line. ``version`` increases with every edit so
    renderers can cheaply tell whether anything changed.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    newline: str = DEFAULT_NEWLINE
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        newline = detect_newline(text)
        return cls(_lines=_LINE_BREAK.split(text), newline=newline)

    @classmethod
    def from_bytes(cls, content: bytes) -> "BufferDocument":
        return cls.from_text(content.decode(ENCODING, ENCODING_ERRORS))

    def to_text(self) -> str:
        return self.newline.join(self._lines)

    def to_bytes(self) -> bytes:
        return self.to_text().encode(ENCODING, ENCODING_ERRORS)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def update_lines(self, start: int, end: int, new_lines: Iterable[str]) -> None:
        """Replace ``[start:end]`` with ``new_lines`` and bump the version."""

        self._lines[start:end] = list(new_lines)
        if not self._lines:
            self._lines.append("")
        self.version += 1
        self.dirty = True

    def set_line(self, index: int, text: str) -> None:
        self.update_lines(index, index + 1, [text])

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index])
