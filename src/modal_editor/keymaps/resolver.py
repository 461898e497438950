"""Per-mode key table lookup with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from modal_editor.config import EditorMode
from modal_editor.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


KeyTable = Dict[str, ResolutionMatch]


class KeymapResolver:
    """Builds a frozen key table per mode and resolves single key tokens.

    Tables are rebuilt lazily whenever the registry revision moves.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[EditorMode, tuple[int, KeyTable]] = {}

    def resolve(self, mode: EditorMode, token: str) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode.value, "token": token},
        ) as handle:
            match = self._ensure_table(mode).get(token)
            if match is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", match.binding.id)
            return ResolutionResult(status="match", match=match)

    def _ensure_table(self, mode: EditorMode) -> KeyTable:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        table: KeyTable = {}
        for binding in self._registry.iter_bindings(mode):
            action = self._registry.get_action(binding.action_id)
            table[binding.token] = ResolutionMatch(binding=binding, action=action)
        self._cache[mode] = (revision, table)
        return table


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
