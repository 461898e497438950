"""Built-in key tables for Normal, Insert, and Command mode."""

from __future__ import annotations

from typing import Iterable, Sequence

from modal_editor.actions import command as command_actions
from modal_editor.actions import core as core_actions
from modal_editor.actions import editing as editing_actions
from modal_editor.config import EditorMode

from .models import ActionRef, Binding
from .registry import KeymapRegistry

NORMAL = EditorMode.NORMAL
INSERT = EditorMode.INSERT
COMMAND = EditorMode.COMMAND

ESCAPE_KEYS = ("ESC", "<Esc>")
ENTER_KEYS = ("ENTER", "RETURN")
ARROW_ACTIONS = (
    ("UP", "cursor.move_up"),
    ("DOWN", "cursor.move_down"),
    ("LEFT", "cursor.move_left"),
    ("RIGHT", "cursor.move_right"),
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.enter_insert",
        handler=core_actions.enter_insert_mode,
        description="Enter insert mode",
    ),
    ActionRef(
        id="core.exit_to_normal",
        handler=core_actions.exit_to_normal_mode,
        description="Return to normal mode",
    ),
    ActionRef(
        id="core.enter_command",
        handler=core_actions.enter_command_mode,
        description="Enter command-line mode",
    ),
    ActionRef(
        id="core.request_quit",
        handler=core_actions.request_quit,
        description="Quit the editor",
    ),
    ActionRef(
        id="cursor.move_up",
        handler=editing_actions.move_up,
        description="Move cursor up",
    ),
    ActionRef(
        id="cursor.move_down",
        handler=editing_actions.move_down,
        description="Move cursor down",
    ),
    ActionRef(
        id="cursor.move_left",
        handler=editing_actions.move_left,
        description="Move cursor left",
    ),
    ActionRef(
        id="cursor.move_right",
        handler=editing_actions.move_right,
        description="Move cursor right",
    ),
    ActionRef(
        id="edit.insert_newline",
        handler=editing_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_before_cursor",
        handler=editing_actions.delete_before_cursor,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the command line",
    ),
    ActionRef(
        id="command.cancel_line",
        handler=command_actions.cancel_command_line,
        description="Discard the command line",
    ),
    ActionRef(
        id="command.delete_char",
        handler=command_actions.delete_command_char,
        description="Delete the last command-line character",
    ),
)


def _build_default_bindings() -> tuple[Binding, ...]:
    bindings = [
        Binding.for_key("normal.enter_insert", NORMAL, "i", "core.enter_insert"),
        Binding.for_key("normal.enter_command", NORMAL, ":", "core.enter_command"),
        Binding.for_key("normal.quit", NORMAL, "q", "core.request_quit"),
        Binding.for_key(
            "insert.backspace", INSERT, "BACKSPACE", "edit.delete_before_cursor"
        ),
        Binding.for_key(
            "command.backspace", COMMAND, "BACKSPACE", "command.delete_char"
        ),
    ]
    for key, action_id in ARROW_ACTIONS:
        for mode in (NORMAL, INSERT):
            bindings.append(
                Binding.for_key(f"{mode.value}.{key.lower()}", mode, key, action_id)
            )
    for index, key in enumerate(ESCAPE_KEYS):
        suffix = "_alt" if index else ""
        bindings.append(
            Binding.for_key(
                f"insert.exit_escape{suffix}", INSERT, key, "core.exit_to_normal"
            )
        )
        bindings.append(
            Binding.for_key(
                f"command.cancel_escape{suffix}", COMMAND, key, "command.cancel_line"
            )
        )
    for key in ENTER_KEYS:
        bindings.append(
            Binding.for_key(
                f"insert.newline_{key.lower()}", INSERT, key, "edit.insert_newline"
            )
        )
        bindings.append(
            Binding.for_key(
                f"command.submit_{key.lower()}", COMMAND, key, "command.submit_line"
            )
        )
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = _build_default_bindings()


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and the per-mode key tables."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())
    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
