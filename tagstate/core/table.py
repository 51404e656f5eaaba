# tagstate/core/table.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from tagstate.core.entries import BareState, Handled, TransitionEntry
from tagstate.core.errors import BadTransition, ValidationError

WILDCARD = "*"

_ActionMap = Dict[str, TransitionEntry]


class TransitionTable:
    """
    Compiled, read-only form of a nested ``{state: {action: entry}}`` mapping.

    Entries are next-state strings, ``(nominal_state, handler)`` pairs, or
    ready-made :class:`BareState` / :class:`Handled` instances. The top-level
    ``"*"`` key holds wildcard actions available from every state. A state's
    own action map may also contain a ``"*"`` mapping, which acts as a fallback
    for that state only.

    A compiled table is never mutated and can be shared by any number of
    machines.
    """

    def __init__(self, table: Mapping[str, Mapping[str, Any]]) -> None:
        """
        Compile and validate ``table``.

        :param table: The nested transition mapping.
        :raises ValidationError: If any state or entry is malformed.
        """
        self._states: Dict[str, _ActionMap] = {}
        self._local_wildcards: Dict[str, _ActionMap] = {}
        self._wildcard: _ActionMap = {}
        _TableCompiler(self).compile(table)

    @classmethod
    def coerce(cls, table: Any) -> "TransitionTable":
        """
        Return ``table`` unchanged if it is already compiled, otherwise compile it.
        """
        if isinstance(table, cls):
            return table
        return cls(table)

    def resolve(self, state: str, action: str) -> TransitionEntry:
        """
        Find the entry for ``action`` in ``state``. The state's own entries are
        checked first, then the state's local wildcard map, then the global
        wildcard state.

        :raises BadTransition: If no entry matches.
        """
        entry = self._lookup(state, action)
        if entry is None:
            raise BadTransition(state, action)
        return entry

    def get(self, state: str, action: str) -> Optional[TransitionEntry]:
        """Like :meth:`resolve` but returns None instead of raising."""
        return self._lookup(state, action)

    def actions_for(self, state: str) -> FrozenSet[str]:
        """Every action that resolves from ``state``, wildcards included."""
        actions = set(self._wildcard)
        actions.update(self._local_wildcards.get(state, ()))
        actions.update(self._states.get(state, ()))
        return frozenset(actions)

    @property
    def states(self) -> FrozenSet[str]:
        """Declared state names, not counting the wildcard key."""
        return frozenset(self._states)

    @property
    def wildcard_actions(self) -> FrozenSet[str]:
        return frozenset(self._wildcard)

    def _lookup(self, state: str, action: str) -> Optional[TransitionEntry]:
        for actions in (self._states.get(state), self._local_wildcards.get(state), self._wildcard):
            if actions and action in actions:
                return actions[action]
        return None

    def __contains__(self, state: object) -> bool:
        return state in self._states

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"TransitionTable(states={sorted(self._states)!r}, wildcard={sorted(self._wildcard)!r})"


class _TableCompiler:
    """
    Internal helper that turns the raw mapping into entry objects, collecting
    every problem before raising so a bad table is reported in one go.
    """

    def __init__(self, table: TransitionTable) -> None:
        self._table = table
        self._errors: List[str] = []

    def compile(self, raw: Mapping[str, Mapping[str, Any]]) -> None:
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Transition table must be a mapping, got {type(raw).__name__}")

        for state, actions in raw.items():
            if not isinstance(actions, Mapping):
                self._errors.append(f"State '{state}' must map to a mapping of actions")
                continue
            if state == WILDCARD:
                self._table._wildcard = self._compile_actions(state, actions)
                continue

            local = actions.get(WILDCARD)
            if local is not None:
                if isinstance(local, Mapping):
                    self._table._local_wildcards[state] = self._compile_actions(f"{state}.{WILDCARD}", local)
                else:
                    self._errors.append(f"State '{state}': '{WILDCARD}' must map to a mapping of actions")
            own = {action: entry for action, entry in actions.items() if action != WILDCARD}
            self._table._states[state] = self._compile_actions(state, own)

        if self._errors:
            raise ValidationError("Invalid transition table:\n" + "\n".join(self._errors), self._errors)

    def _compile_actions(self, where: str, actions: Mapping[str, Any]) -> _ActionMap:
        compiled: _ActionMap = {}
        for action, raw in actions.items():
            entry = self._compile_entry(where, action, raw)
            if entry is not None:
                compiled[action] = entry
        return compiled

    def _compile_entry(self, where: str, action: str, raw: Any) -> Optional[TransitionEntry]:
        if isinstance(raw, (BareState, Handled)):
            return raw
        if isinstance(raw, str):
            return BareState(raw)
        if isinstance(raw, (tuple, list)):
            pair = _as_pair(raw)
            if pair is not None:
                return Handled(*pair)
        self._errors.append(
            f"State '{where}', action '{action}': entry must be a state name or a (state, handler) pair, got {raw!r}"
        )
        return None


def _as_pair(raw: Any) -> Optional[Tuple[str, Any]]:
    if len(raw) != 2:
        return None
    target, handler = raw
    if not isinstance(target, str) or not callable(handler):
        return None
    return target, handler
