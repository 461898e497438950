from __future__ import annotations

from modal_editor.config import EditorMode
from modal_editor.keymaps import ActionRef, Binding, KeymapRegistry, KeymapResolver


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_bound_key() -> None:
    binding = Binding.for_key("normal.i", EditorMode.NORMAL, "i", "core.insert")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(EditorMode.NORMAL, "i")

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "core.insert"


def test_resolver_scopes_lookup_to_mode() -> None:
    binding = Binding.for_key("normal.i", EditorMode.NORMAL, "i", "core.insert")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(EditorMode.INSERT, "i")

    assert result.status == "miss"
    assert result.match is None


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    assert resolver.resolve(EditorMode.NORMAL, "x").status == "miss"

    registry.register_action(make_action("core.x"))
    registry.register_binding(
        Binding.for_key("normal.x", EditorMode.NORMAL, "x", "core.x")
    )

    match = resolver.resolve(EditorMode.NORMAL, "x")
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == "normal.x"


def test_resolver_forgets_unregistered_binding() -> None:
    binding = Binding.for_key("normal.x", EditorMode.NORMAL, "x", "core.x")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)
    assert resolver.resolve(EditorMode.NORMAL, "x").status == "match"

    registry.unregister_binding("normal.x")

    assert resolver.resolve(EditorMode.NORMAL, "x").status == "miss"
