# tagstate/core/entries.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from tagstate.core.machine import Machine


@dataclass(frozen=True)
class BareState:
    """
    An unconditional transition: the machine moves to ``target`` and no
    handler runs.
    """

    target: str


@dataclass(frozen=True)
class Handled:
    """
    A transition with a side-effecting handler. The handler is called as
    ``handler(ctx, *args)`` and whatever it returns becomes the next state.
    ``target`` is the nominal next state; the machine does not use it for the
    transition itself, but handlers can read it from ``ctx.target``.
    """

    target: str
    handler: Callable[..., Any]


TransitionEntry = Union[BareState, Handled]


class DispatchContext:
    """
    Passed as the first argument to every handler. Gives the handler access to
    the owning machine and its state data without binding the handler to it.
    """

    __slots__ = ("machine", "source", "action", "target")

    def __init__(self, machine: "Machine", source: str, action: str, target: str) -> None:
        """
        :param machine: The machine running the handler.
        :param source: The state the machine is transitioning from.
        :param action: The action being dispatched.
        :param target: The nominal next state of the handled entry.
        """
        self.machine = machine
        self.source = source
        self.action = action
        self.target = target

    @property
    def data(self) -> Any:
        """The machine's state data."""
        return self.machine.data

    @data.setter
    def data(self, value: Any) -> None:
        self.machine.data = value

    def __repr__(self) -> str:
        return f"DispatchContext(source={self.source!r}, action={self.action!r}, target={self.target!r})"
