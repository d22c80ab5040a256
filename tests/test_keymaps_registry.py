from __future__ import annotations

import pytest

from termedit.keymaps import (
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def save_binding(binding_id: str = "normal.save", keys: str = "ctrl+s", **fields: object) -> Binding:
    return Binding(
        id=binding_id,
        mode=str(fields.pop("mode", "normal")),
        sequence=KeySequence.from_strings(*keys.split()),
        action_id="file.save",
        **fields,  # type: ignore[arg-type]
    )


@pytest.fixture
def registry() -> KeymapRegistry:
    registry = KeymapRegistry()
    registry.register_action(ActionRef("file.save", lambda *args: None))
    return registry


@pytest.mark.parametrize(
    ("text", "token"),
    [
        ("shift+CTRL+s", "ctrl+shift+s"),
        ("alt+ctrl+x", "ctrl+alt+x"),
        ("ENTER", "ENTER"),
        ("+", "+"),
        ("ctrl++", "ctrl++"),
    ],
)
def test_keystroke_tokens_are_canonical(text: str, token: str) -> None:
    assert KeyStroke.parse(text).token == token


def test_when_clause_negation() -> None:
    clause = WhenClause.parse("!search_active")

    assert (clause.flag, clause.expected) == ("search_active", False)
    assert clause.evaluate({})
    assert not clause.evaluate({"search_active": True})


def test_binding_rejects_empty_fields() -> None:
    with pytest.raises(ValueError):
        save_binding(binding_id="")
    with pytest.raises(ValueError):
        KeySequence.from_strings()


def test_registered_binding_is_listed_by_mode(registry: KeymapRegistry) -> None:
    binding = registry.register_binding(save_binding())

    assert list(registry.iter_bindings("normal")) == [binding]
    assert list(registry.iter_bindings("search")) == []
    assert registry.get_binding("normal.save") is binding


def test_binding_to_unknown_action_is_refused() -> None:
    with pytest.raises(KeyError, match="unknown action 'file.save'"):
        KeymapRegistry().register_binding(save_binding())


def test_duplicate_action_needs_replace(registry: KeymapRegistry) -> None:
    with pytest.raises(ValueError):
        registry.register_action(ActionRef("file.save", print))

    registry.register_action(ActionRef("file.save", print), replace=True)
    assert registry.get_action("file.save").handler is print


def test_same_keys_same_mode_conflict(registry: KeymapRegistry) -> None:
    registry.register_binding(save_binding())

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(save_binding("normal.save_again"))

    assert [other.id for other in info.value.conflicts] == ["normal.save"]
    assert "normal.save_again" in str(info.value)


def test_reusing_an_id_is_refused(registry: KeymapRegistry) -> None:
    registry.register_binding(save_binding())

    with pytest.raises(ValueError):
        registry.register_binding(save_binding(keys="ctrl+w"))


def test_modes_and_when_flags_keep_bindings_apart(registry: KeymapRegistry) -> None:
    registry.register_binding(save_binding())
    registry.register_binding(save_binding("search.save", mode="search"))
    registry.register_binding(
        save_binding("normal.save_searching", when=(WhenClause("search_active"),))
    )
    registry.register_binding(
        save_binding("normal.save_idle", when=(WhenClause.parse("!search_active"),))
    )

    stats = registry.stats()
    assert stats.binding_count == 4
    assert stats.modes == ("normal", "search")


def test_replace_evicts_colliding_and_same_id_bindings(registry: KeymapRegistry) -> None:
    registry.register_binding(save_binding())
    registry.register_binding(save_binding("normal.write", keys="ctrl+w"))

    winner = registry.register_binding(save_binding("normal.write", keys="ctrl+s"), replace=True)

    assert list(registry.iter_bindings()) == [winner]


def test_unregister_bumps_revision_once(registry: KeymapRegistry) -> None:
    binding = registry.register_binding(save_binding())
    revision = registry.revision()

    assert registry.unregister_binding("normal.save") == binding
    assert registry.unregister_binding("normal.save") is None
    assert registry.revision() == revision + 1
    assert registry.stats().binding_count == 0


def test_defaults_cover_normal_and_search() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.stats().modes == ("normal", "search")
    assert registry.get_binding("normal.search").sequence.tokens == ("ctrl+f",)
    assert registry.get_binding("search.exit_escape").action_id == "core.exit_to_normal"


def test_defaults_can_be_filtered() -> None:
    only_save = KeymapRegistry()
    load_default_keymaps(only_save, include_bindings=("normal.save",))
    no_quit = KeymapRegistry()
    load_default_keymaps(no_quit, exclude_bindings=("normal.quit",))

    assert [b.id for b in only_save.iter_bindings()] == ["normal.save"]
    with pytest.raises(KeyError):
        no_quit.get_binding("normal.quit")


def test_per_mode_override_rebinds_save() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, per_mode_overrides={"normal": (save_binding(keys="ctrl+w"),)})

    assert registry.get_binding("normal.save").sequence.tokens == ("ctrl+w",)
    with pytest.raises(ValueError):
        load_default_keymaps(
            KeymapRegistry(), per_mode_overrides={"search": (save_binding(keys="ctrl+w"),)}
        )
