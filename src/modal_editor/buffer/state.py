"""Cursor and direction types for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Cursor = Tuple[int, int]  # (row, column)


class Direction(str, Enum):
    """Cursor movement directions accepted by ``TextBuffer.move_cursor``."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(slots=True)
class BufferState:
    """Mutable cursor tied to a BufferDocument."""

    cursor: Cursor = (0, 0)

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)
