# tagstate/core/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from .entries import BareState, DispatchContext, Handled, TransitionEntry
from .errors import (
    BadTransition,
    ReentrantDispatchError,
    StreamClosedError,
    TagStateError,
    TransitionError,
    ValidationError,
)
from .hooks import Hook, HookManager, HookProtocol
from .machine import Machine
from .table import WILDCARD, TransitionTable

__all__ = [
    "BareState",
    "Handled",
    "TransitionEntry",
    "DispatchContext",
    "TransitionTable",
    "WILDCARD",
    "Machine",
    "Hook",
    "HookManager",
    "HookProtocol",
    "TagStateError",
    "TransitionError",
    "BadTransition",
    "ReentrantDispatchError",
    "ValidationError",
    "StreamClosedError",
]
