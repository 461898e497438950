"""Cursor movement and text edits dispatched from Normal and Insert mode."""

from __future__ import annotations

from modal_editor.buffer import Direction
from modal_editor.modes.base_mode import ModeContext, ModeResult


def _move(context: ModeContext, direction: Direction) -> ModeResult:
    before = context.buffer.cursor
    after = context.buffer.move_cursor(direction)
    status = "cursor_move" if after != before else "cursor_clamped"
    return ModeResult(consumed=True, status=status)


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, Direction.UP)


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, Direction.DOWN)


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, Direction.LEFT)


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    return _move(context, Direction.RIGHT)


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.insert_newline()
    return ModeResult(consumed=True, status="insert_newline")


def delete_before_cursor(context: ModeContext, match) -> ModeResult:
    del match
    context.buffer.delete_before_cursor()
    return ModeResult(consumed=True, status="delete_before_cursor")


__all__ = [
    "move_up",
    "move_down",
    "move_left",
    "move_right",
    "insert_newline",
    "delete_before_cursor",
]
