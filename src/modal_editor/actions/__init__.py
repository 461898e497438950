"""Editing verbs bound to keys by the default keymaps."""

from .core import (
    enter_command_mode,
    enter_insert_mode,
    exit_to_normal_mode,
    request_quit,
)
from .editing import (
    delete_before_cursor,
    insert_newline,
    move_down,
    move_left,
    move_right,
    move_up,
)
from .command import cancel_command_line, delete_command_char, submit_command_line

__all__ = [
    "enter_insert_mode",
    "exit_to_normal_mode",
    "enter_command_mode",
    "request_quit",
    "move_up",
    "move_down",
    "move_left",
    "move_right",
    "insert_newline",
    "delete_before_cursor",
    "submit_command_line",
    "cancel_command_line",
    "delete_command_char",
]
