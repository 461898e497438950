"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Optional

from modal_editor.keymaps import KeymapResolver, ResolutionMatch, make_token
from modal_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    return make_token(key.key, key.modifiers)


def printable_text(key: KeyInput) -> Optional[str]:
    """Return the single printable character ``key`` types, if any."""

    if {modifier.lower() for modifier in key.modifiers} - {"shift"}:
        return None
    text = key.text if key.text is not None else key.key
    if len(text) == 1 and text.isprintable():
        return text
    return None


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


class KeymapMode(Mode):
    """Mode whose key table lives in the keymap registry.

    Bound keys run their action; anything else goes to ``handle_unbound``.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"modal_editor.modes.{self.name.value}")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, key_to_token(key))
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = [
    "KeymapMode",
    "key_to_token",
    "printable_text",
    "require_keymap_resolver",
]
