import pytest

from rawedit.keymaps import (
    FALLBACK_ACTION_ID,
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)
from rawedit.keymaps.defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS


def make_action(action_id: str = "edit.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    unit: str = "X",
    action_id: str = "edit.test",
) -> Binding:
    return Binding(id=binding_id, unit=unit, action_id=action_id)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="x")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    assert registry.binding_for("X") == binding


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="x"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="x.duplicate"))

    assert [b.id for b in excinfo.value.conflicts] == ["x"]


def test_register_binding_replace_drops_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_action(make_action("edit.other"))
    registry.register_binding(make_binding(binding_id="x"))

    replacement = make_binding(binding_id="x.other", action_id="edit.other")
    registry.register_binding(replacement, replace=True)

    assert registry.binding_for("X") == replacement
    assert registry.stats().binding_count == 1
    with pytest.raises(KeyError):
        registry.get_binding("x")


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_duplicate_binding_id_rejected() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="x"))

    with pytest.raises(ValueError):
        registry.register_binding(make_binding(binding_id="x", unit="Y"))


def test_duplicate_action_rejected_unless_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())

    registry.register_action(make_action(), replace=True)
    assert registry.stats().action_count == 1


def test_unregister_binding_frees_unit() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="x"))
    revision = registry.revision()

    removed = registry.unregister_binding("x")

    assert removed is not None
    assert registry.binding_for("X") is None
    assert registry.revision() > revision
    assert registry.unregister_binding("x") is None


def test_binding_requires_single_unit() -> None:
    with pytest.raises(ValueError):
        Binding(id="multi", unit="ab", action_id="edit.test")
    with pytest.raises(ValueError):
        Binding(id="empty", unit="", action_id="edit.test")


def test_action_ref_validation() -> None:
    with pytest.raises(ValueError):
        ActionRef(id="", handler=lambda: None)
    with pytest.raises(TypeError):
        ActionRef(id="bad", handler="not callable")  # type: ignore[arg-type]

    action = make_action("edit.named")
    assert action.telemetry_name == "edit.named"


def test_fallback_requires_registered_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(LookupError):
        registry.fallback_action()
    with pytest.raises(KeyError):
        registry.set_fallback("edit.missing")


def test_load_default_keymaps_registers_alphabet() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert stats.fallback == FALLBACK_ACTION_ID
    assert set("BFNPAEVCQKSO\n\t\b\x7f") == set(stats.units)


def test_load_default_keymaps_exclude_filter() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=["open_line"])

    assert registry.binding_for("O") is None
    assert registry.binding_for("K") is not None


def test_load_default_keymaps_extra_bindings() -> None:
    registry = KeymapRegistry()
    extra = Binding(id="quit.ctrl_d", unit="\x04", action_id="session.quit")

    load_default_keymaps(registry, extra_bindings=[extra])

    assert registry.binding_for("\x04") == extra
