"""Normal mode: navigation and entry point to the other modes."""

from __future__ import annotations

from modal_editor.config import EditorMode

from .keymap_helpers import KeymapMode


class NormalMode(KeymapMode):
    """Every key in Normal mode comes from its key table; the rest is ignored."""

    name = EditorMode.NORMAL
