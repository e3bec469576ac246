import pytest

from textfield_engine.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    stroke: str = "ctrl+K",
    action_id: str = "core.test",
) -> Binding:
    return Binding(id=binding_id, stroke=KeyStroke.parse(stroke), action_id=action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="test.k")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    assert registry.revision() == 1


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="test.k"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="test.k.duplicate"))


def test_replace_binding_drops_previous_owner() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="test.k"))

    registry.register_binding(make_binding(binding_id="test.k2"), replace=True)

    assert [b.id for b in registry.iter_bindings()] == ["test.k2"]


def test_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="test.k"))


def test_duplicate_action_rejected_unless_replaced() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="test.k"))

    removed = registry.unregister_binding("test.k")

    assert removed is not None
    assert registry.resolve(KeyStroke("K", ("ctrl",))) is None
    assert registry.unregister_binding("test.k") is None


def test_stroke_normalization() -> None:
    stroke = KeyStroke("a", ("Shift", "ctrl", "shift"))

    assert stroke.key == "A"
    assert stroke.modifiers == ("ctrl", "shift")
    assert stroke.token == "ctrl+shift+A"
    assert KeyStroke.parse("shift+ctrl+a") == stroke


def test_default_keymaps_resolve_navigation_keys() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    for key, action_id in [
        ("LEFT", "caret.left"),
        ("RIGHT", "caret.right"),
        ("HOME", "caret.home"),
        ("END", "caret.end"),
        ("BACKSPACE", "edit.backspace"),
        ("DELETE", "edit.delete"),
    ]:
        match = registry.resolve(KeyStroke(key))
        assert match is not None
        assert match.action.id == action_id


def test_shift_falls_back_to_plain_binding() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    match = registry.resolve(KeyStroke("LEFT", ("shift",)))

    assert match is not None
    assert match.binding.id == "key.left"


def test_ctrl_modifier_does_not_fall_back() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    assert registry.resolve(KeyStroke("LEFT", ("ctrl",))) is None
    assert registry.resolve(KeyStroke("A", ("ctrl",))) is not None


def test_load_defaults_with_exclusions_and_extras() -> None:
    registry = KeymapRegistry()
    extra = Binding(id="key.ctrl_e", stroke="ctrl+E", action_id="caret.end")

    load_default_keymaps(
        registry, exclude_bindings=("key.select_all",), extra_bindings=(extra,)
    )

    assert registry.resolve(KeyStroke("A", ("ctrl",))) is None
    match = registry.resolve(KeyStroke("E", ("ctrl",)))
    assert match is not None and match.action.id == "caret.end"
