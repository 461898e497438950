"""Value types for key tables: keystrokes, actions, and bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from modal_editor.config import EditorMode


def _canonical_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    cleaned = {name.strip().lower() for name in modifiers}
    cleaned.discard("")
    return tuple(sorted(cleaned))


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Table lookup key: ``"x"``, or ``"ctrl+shift+x"`` with modifiers."""

    return "+".join((*_canonical_modifiers(modifiers), key))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("KeyStroke needs a key name")
        object.__setattr__(self, "modifiers", _canonical_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editor action; calling it runs ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef needs an id")
        if not callable(self.handler):
            raise TypeError(f"Handler for action '{self.id}' is not callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Maps one keystroke in one mode to an action id."""

    id: str
    mode: EditorMode
    stroke: KeyStroke
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id or not self.action_id:
            raise ValueError("Binding needs both an id and an action_id")
        # Accepts plain strings such as "normal"; unknown names raise ValueError.
        object.__setattr__(self, "mode", EditorMode(self.mode))

    @classmethod
    def for_key(
        cls,
        binding_id: str,
        mode: EditorMode,
        key: str,
        action_id: str,
        description: str = "",
    ) -> "Binding":
        return cls(binding_id, mode, KeyStroke(key), action_id, description)

    @property
    def token(self) -> str:
        return self.stroke.token


__all__ = [
    "KeyStroke",
    "ActionRef",
    "Binding",
    "make_token",
]
