import pytest

from modal_editor.config import EditorMode
from modal_editor.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
)
from modal_editor.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: EditorMode = EditorMode.NORMAL,
    key: str = "x",
    action_id: str = "core.test",
) -> Binding:
    return Binding.for_key(binding_id, mode, key, action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="normal.x")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode=EditorMode.NORMAL)) == [binding]
    assert registry.binding_for(EditorMode.NORMAL, "x") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="normal.x"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="normal.x.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["normal.x"]


def test_same_key_in_different_modes_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.x"))
    registry.register_binding(
        make_binding(binding_id="insert.x", mode=EditorMode.INSERT)
    )

    assert registry.stats().binding_count == 2
    assert registry.stats().modes == (EditorMode.INSERT, EditorMode.NORMAL)


def test_register_binding_with_replace_evicts_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="first")
    second = make_binding(binding_id="second")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.binding_for(EditorMode.NORMAL, "x") == second


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.x"))


def test_duplicate_action_rejected_without_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.binding_for(EditorMode.NORMAL, "x") is None
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_keystroke_token_includes_sorted_modifiers() -> None:
    stroke = KeyStroke("s", modifiers=("SHIFT", "ctrl"))

    assert stroke.token == "ctrl+shift+s"


def test_binding_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        Binding(
            id="visual.x",
            mode="visual",  # type: ignore[arg-type]
            stroke=KeyStroke("x"),
            action_id="core.test",
        )


def test_load_default_keymaps_registers_every_binding() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.get_binding("normal.enter_insert").action_id == "core.enter_insert"
    assert registry.binding_for(EditorMode.INSERT, "ENTER") is not None
    assert registry.binding_for(EditorMode.INSERT, "i") is None


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, include_bindings=("normal.enter_insert",))

    assert registry.stats().binding_count == 1


def test_load_default_keymaps_extra_binding_replaces_default() -> None:
    registry = KeymapRegistry()
    custom = Binding.for_key(
        "normal.i_enters_command", EditorMode.NORMAL, "i", "core.enter_command"
    )

    load_default_keymaps(registry, replace=True, extra_bindings=(custom,))

    assert registry.binding_for(EditorMode.NORMAL, "i") == custom
    with pytest.raises(KeyError):
        registry.get_binding("normal.enter_insert")
