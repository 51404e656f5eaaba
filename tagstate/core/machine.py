# tagstate/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Mapping, Optional, Union

from tagstate.core.entries import BareState, DispatchContext, TransitionEntry
from tagstate.core.errors import ReentrantDispatchError
from tagstate.core.hooks import HookManager
from tagstate.core.table import TransitionTable

logger = logging.getLogger(__name__)


class Machine:
    """
    A table-driven state machine. Holds a shared transition table, the name of
    the current state and an opaque ``data`` payload for handlers to use.

    Dispatch is synchronous and not thread-safe; callers that drive one
    machine from several threads must serialize access themselves.
    """

    def __init__(
        self,
        table: Union[TransitionTable, Mapping[str, Mapping[str, Any]]],
        initial_state: str,
        data: Any = None,
        hooks: Optional[List[Any]] = None,
    ) -> None:
        """
        :param table: A compiled TransitionTable or a raw nested mapping.
        :param initial_state: The state in which this machine begins.
        :param data: Initial state data, passed through to handlers untouched.
        :param hooks: Optional list of objects implementing on_transition / on_error.
        :raises ValidationError: If a raw table fails to compile.
        """
        self._table = TransitionTable.coerce(table)
        self._initial_state = initial_state
        self._state = initial_state
        self.data = data
        self._hooks = HookManager(hooks)
        self._dispatching = False

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def state(self) -> Any:
        """The current state name, or whatever the last handler returned."""
        return self._state

    @property
    def initial_state(self) -> str:
        return self._initial_state

    @property
    def hooks(self) -> HookManager:
        return self._hooks

    @property
    def is_dispatching(self) -> bool:
        """True while a handler is running."""
        return self._dispatching

    def dispatch(self, action: str, *args: Any) -> None:
        """
        Apply ``action`` to the current state.

        A bare entry moves straight to its target. A handled entry calls
        ``handler(ctx, *args)`` and moves to whatever the handler returns,
        regardless of the entry's nominal target.

        :param action: The action name.
        :param args: Positional arguments passed on to the handler.
        :raises BadTransition: If the action is not legal in the current state.
        :raises ReentrantDispatchError: If called from inside a handler of this machine.
        """
        # Reported to hooks by the outer dispatch once it propagates out of the handler.
        if self._dispatching:
            raise ReentrantDispatchError(
                f"Cannot dispatch '{action}' while another action is being handled in state '{self._state}'"
            )

        source = self._state
        try:
            entry = self._table.resolve(source, action)
            target = self._apply(entry, source, action, args)
        except Exception as e:
            logger.debug("Action %r failed in state %r: %s", action, source, e)
            self._notify_error(e)
            raise

        self._state = target
        logger.debug("Transition %r --%s--> %r", source, action, target)
        self._hooks.execute_on_transition(self, source, action, target)

    def _notify_error(self, error: Exception) -> None:
        """Invoke on_error hooks. A failing hook is logged; the original error still propagates."""
        try:
            self._hooks.execute_on_error(error)
        except Exception:
            logger.exception("on_error hook failed while handling %r", error)

    def _apply(self, entry: TransitionEntry, source: Any, action: str, args: tuple) -> Any:
        if isinstance(entry, BareState):
            return entry.target

        ctx = DispatchContext(self, source, action, entry.target)
        self._dispatching = True
        try:
            return entry.handler(ctx, *args)
        finally:
            self._dispatching = False

    def can_dispatch(self, action: str) -> bool:
        """Check whether ``action`` resolves from the current state, without applying it."""
        return self._table.get(self._state, action) is not None

    def available_actions(self) -> FrozenSet[str]:
        """All actions that resolve from the current state."""
        return self._table.actions_for(self._state)

    def reset(self, data: Any = None) -> None:
        """
        Return the machine to its initial state and replace its data.

        :param data: The new state data.
        """
        if self._dispatching:
            raise ReentrantDispatchError("Cannot reset a machine while a handler is running")
        logger.debug("Reset from %r to %r", self._state, self._initial_state)
        self._state = self._initial_state
        self.data = data

    def __repr__(self) -> str:
        return f"Machine(state={self._state!r})"
