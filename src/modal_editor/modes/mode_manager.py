"""The Normal/Insert/Command state machine."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Type

from modal_editor.config import EditorMode
from modal_editor.keymaps import KeymapRegistry, KeymapResolver
from modal_editor.keymaps.defaults import load_default_keymaps
from modal_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode

KEYMAP_LOGGER = "modal_editor.keymaps"


class ModeManager:
    """Routes key events to the current mode and applies the switch it asks for.

    The first mode registered is the initial one. Each ``handle_key`` call
    runs the mode's action and any resulting transition before returning.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[EditorMode, Mode] = {}
        self._current: Optional[Mode] = None

        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name=KEYMAP_LOGGER)
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name=KEYMAP_LOGGER
        )
        # Modes look the resolver up here when they are constructed.
        context.extras.setdefault("keymap_resolver", self.keymap_resolver)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._current

    @property
    def mode(self) -> EditorMode:
        return self._require_current().name

    @property
    def command_line(self) -> str:
        """Pending ``:`` text, empty outside Command mode."""

        if self._current is None or self._current.name is not EditorMode.COMMAND:
            return ""
        return self.context.command_line

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._current is None:
            self._current = mode
            mode.on_enter(None)
        return mode

    def switch_mode(self, target: EditorMode) -> None:
        try:
            incoming = self._modes[target]
        except KeyError:
            raise KeyError(f"Mode '{target.value}' is not registered") from None
        outgoing = self._current
        if outgoing is incoming:
            return

        if outgoing is not None:
            outgoing.on_exit(target)
        self._current = incoming
        incoming.on_enter(outgoing.name if outgoing is not None else None)

        self.context.bus.emit("mode.switch", target)
        telemetry.record_event(
            "mode.switch",
            data={
                "from": outgoing.name.value if outgoing is not None else None,
                "to": target.value,
            },
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._require_current()
        with telemetry.span(
            f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.key},
        ) as handle:
            result = mode.handle_key(key)
            handle.add_metadata("status", result.status)
        if result.switch_to is not None:
            self.switch_mode(result.switch_to)
        return result

    def feed(self, keys: Iterable[KeyInput]) -> List[ModeResult]:
        return [self.handle_key(key) for key in keys]

    def _require_current(self) -> Mode:
        if self._current is None:
            raise RuntimeError("No mode registered yet")
        return self._current


def create_default_manager(context: ModeContext) -> ModeManager:
    """ModeManager with the default keymaps and Normal, Insert, Command."""

    manager = ModeManager(context)
    for mode_cls in (NormalMode, InsertMode, CommandMode):
        manager.register_mode(mode_cls)
    return manager
