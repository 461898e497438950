"""Editor mode enumeration and per-mode presentation constants."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ModeConfig:
    """How the status bar presents a mode."""

    label: str
    bg_color: str


class EditorMode(str, Enum):
    """Available editor modes."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


MODE_CONFIGS = {
    EditorMode.NORMAL: ModeConfig("NORMAL", "#98C379"),
    EditorMode.INSERT: ModeConfig("INSERT", "#E8B86D"),
    EditorMode.COMMAND: ModeConfig("COMMAND", "#E06C75"),
}
