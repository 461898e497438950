"""Adapter boundary types for handing buffer state to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from .state import Cursor


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    lines: Sequence[str]
    cursor: Cursor
    dirty: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How renderers pull the latest buffer state after each key event."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a collaborator hands the buffer an out-of-bounds cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor
