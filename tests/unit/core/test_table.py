# tests/unit/core/test_table.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from tagstate.core.entries import BareState, Handled
from tagstate.core.errors import BadTransition, ValidationError
from tagstate.core.table import WILDCARD, TransitionTable


def handler(ctx, *args):
    return ctx.target


def test_compiles_bare_and_handled_entries():
    table = TransitionTable({"A": {"x": "B", "y": ("C", handler), "z": ["D", handler]}})

    assert table.resolve("A", "x") == BareState("B")
    assert table.resolve("A", "y") == Handled("C", handler)
    assert table.resolve("A", "z") == Handled("D", handler)


def test_accepts_prebuilt_entries():
    entry = Handled("B", handler)
    table = TransitionTable({"A": {"x": entry, "y": BareState("C")}})

    assert table.resolve("A", "x") is entry
    assert table.resolve("A", "y") == BareState("C")


def test_wildcard_is_not_a_state():
    table = TransitionTable({"A": {"x": "B"}, WILDCARD: {"e": "DONE"}})

    assert table.states == frozenset({"A"})
    assert WILDCARD not in table
    assert len(table) == 1
    assert list(table) == ["A"]
    assert table.wildcard_actions == frozenset({"e"})


def test_state_entry_takes_precedence_over_wildcard():
    table = TransitionTable({"A": {"e": "OWN"}, "*": {"e": "WILD"}})

    assert table.resolve("A", "e") == BareState("OWN")
    assert table.resolve("B", "e") == BareState("WILD")


def test_state_local_wildcard_is_consulted_before_global():
    table = TransitionTable(
        {
            "A": {"x": "B", "*": {"e": "LOCAL"}},
            "B": {},
            "*": {"e": "GLOBAL", "r": "RESET"},
        }
    )

    assert table.resolve("A", "e") == BareState("LOCAL")
    assert table.resolve("B", "e") == BareState("GLOBAL")
    assert table.resolve("A", "r") == BareState("RESET")
    assert "*" not in table.actions_for("A")


def test_resolve_unknown_action_raises():
    table = TransitionTable({"A": {"x": "B"}})

    with pytest.raises(BadTransition) as exc:
        table.resolve("A", "nope")
    assert exc.value.state == "A"
    assert exc.value.action == "nope"
    assert table.get("A", "nope") is None


def test_resolve_from_unknown_state_uses_wildcard_only():
    table = TransitionTable({"A": {"x": "B"}, "*": {"e": "DONE"}})

    assert table.resolve("Nowhere", "e") == BareState("DONE")
    with pytest.raises(BadTransition):
        table.resolve("Nowhere", "x")


def test_actions_for_merges_all_levels():
    table = TransitionTable({"A": {"x": "B", "*": {"y": "C"}}, "*": {"e": "DONE"}})

    assert table.actions_for("A") == frozenset({"x", "y", "e"})
    assert table.actions_for("B") == frozenset({"e"})


def test_targets_are_not_required_to_be_states():
    table = TransitionTable({"A": {"x": "Unlisted"}})
    assert table.resolve("A", "x").target == "Unlisted"


def test_coerce_returns_compiled_table_unchanged():
    table = TransitionTable({"A": {"x": "B"}})
    assert TransitionTable.coerce(table) is table
    assert isinstance(TransitionTable.coerce({"A": {}}), TransitionTable)


@pytest.mark.parametrize(
    "raw",
    [
        {"A": {"x": 42}},
        {"A": {"x": ("B",)}},
        {"A": {"x": ("B", "not callable")}},
        {"A": {"x": (1, handler)}},
        {"A": {"x": ("B", handler, "extra")}},
        {"A": ["not", "a", "mapping"]},
        {"A": {"*": "B"}},
        {"*": "B"},
    ],
)
def test_malformed_tables_are_rejected(raw):
    with pytest.raises(ValidationError):
        TransitionTable(raw)


def test_validation_reports_every_problem():
    with pytest.raises(ValidationError) as exc:
        TransitionTable({"A": {"x": 1, "y": None}, "B": "oops"})
    assert len(exc.value.errors) == 3


def test_non_mapping_table_is_rejected():
    with pytest.raises(ValidationError):
        TransitionTable([("A", {})])
