"""Registry of editor actions and the per-mode key tables that invoke them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from modal_editor.config import EditorMode
from modal_editor.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[EditorMode, ...]


class KeymapConflictError(RuntimeError):
    """A binding claims a key that its mode already maps elsewhere."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(repr(existing.id) for existing in self.conflicts)
        super().__init__(
            f"Key '{binding.token}' in {binding.mode.value} mode is already bound "
            f"by {taken}; cannot add '{binding.id}'"
        )


class KeymapRegistry:
    """Actions by id plus one ``token -> Binding`` table per mode.

    ``revision()`` moves on every binding change so resolvers know when
    their cached tables are stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._by_id: Dict[str, Binding] = {}
        self._tables: Dict[EditorMode, Dict[str, Binding]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._by_id.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding`` to its mode's table.

        Without ``replace`` a binding for an already-mapped key raises
        :class:`KeymapConflictError`, and a reused id raises ``ValueError``.
        With ``replace`` both previous owners are evicted.
        """

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode.value},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            current = self.binding_for(binding.mode, binding.token)
            previous = self._by_id.get(binding.id)
            if not replace:
                if current is not None and current.id != binding.id:
                    handle.add_metadata("conflicts", current.id)
                    raise KeymapConflictError(binding, [current])
                if previous is not None:
                    raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in (current, previous):
                if stale is not None:
                    self._drop(stale)
            self._by_id[binding.id] = binding
            self._tables.setdefault(binding.mode, {})[binding.token] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._by_id.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def binding_for(self, mode: EditorMode, token: str) -> Optional[Binding]:
        return self._tables.get(mode, {}).get(token)

    def iter_bindings(self, mode: Optional[EditorMode] = None) -> Iterator[Binding]:
        if mode is None:
            return iter(list(self._by_id.values()))
        return iter(list(self._tables.get(mode, {}).values()))

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._by_id),
            modes=tuple(sorted(self._tables, key=lambda mode: mode.value)),
        )

    def _drop(self, binding: Binding) -> None:
        self._by_id.pop(binding.id, None)
        table = self._tables.get(binding.mode)
        if table is None:
            return
        if table.get(binding.token) is binding:
            del table[binding.token]
        if not table:
            del self._tables[binding.mode]


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
