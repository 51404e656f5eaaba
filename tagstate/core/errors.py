# tagstate/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List, Optional


class TagStateError(Exception):
    """
    Base exception class for errors raised by the tagstate engine and adapters.
    """


class TransitionError(TagStateError):
    """
    Raised when an action cannot be applied to a machine.
    """


class BadTransition(TransitionError):
    """
    Raised when an action has no entry in the current state and no wildcard
    fallback exists. The machine's state is left unchanged.
    """

    def __init__(self, state: Any, action: str) -> None:
        """
        :param state: The state the machine was in when the action arrived.
        :param action: The action that could not be resolved.
        """
        super().__init__(f"No transition for action '{action}' in state '{state}'")
        self.state = state
        self.action = action


class ReentrantDispatchError(TransitionError):
    """
    Raised when a handler dispatches on the machine that is currently running it.
    """


class ValidationError(TagStateError):
    """
    Raised when a transition table is malformed. All problems found are
    collected in ``errors``.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class StreamClosedError(TagStateError):
    """
    Raised when data is written to an event source or adapter that has ended.
    """
