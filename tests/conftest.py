# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, List
from unittest.mock import MagicMock

import pytest


class FakeEventSource:
    """
    In-memory event source. ``write`` takes a list of ``(kind, payload)``
    events and delivers them synchronously, the way a streaming parser would.
    """

    def __init__(self) -> None:
        self.listeners: List[Any] = []
        self.written: List[Any] = []
        self.ended = False

    def subscribe(self, listener) -> None:
        self.listeners.append(listener)

    def unsubscribe(self, listener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def write(self, chunk) -> None:
        self.written.append(chunk)
        for kind, payload in chunk:
            self.emit(kind, payload)

    def end(self) -> None:
        self.ended = True
        self.emit("end")

    def emit(self, kind: str, payload: Any = None) -> None:
        for listener in list(self.listeners):
            if kind == "end":
                listener.end()
            else:
                getattr(listener, kind)(payload)


@pytest.fixture
def fake_source():
    """An event source that replays scripted events."""
    return FakeEventSource()


@pytest.fixture
def recording_handler():
    """A handler mock that returns a fixed state and records its calls."""
    return MagicMock(return_value="Handled")


@pytest.fixture
def simple_table(recording_handler):
    """
    Idle --go--> Active --stop--> Idle, a handled 'work' action in Active,
    and a wildcard 'abort' action available everywhere.
    """
    return {
        "Idle": {"go": "Active"},
        "Active": {"stop": "Idle", "work": ("Nominal", recording_handler)},
        "*": {"abort": "Aborted"},
    }


@pytest.fixture
def item_table():
    """The open/close/end item table used by the stream scenarios."""

    def enter_item(ctx, tag):
        ctx.data.append(tag.name)
        return "ITEM"

    return {
        "START": {"o:item": ["ITEM", enter_item]},
        "ITEM": {"c:item": "START"},
        "*": {"e": "DONE"},
    }


@pytest.fixture
def dummy_hooks():
    """A list of hook mocks for testing HookManager."""
    hook = MagicMock()
    hook.on_transition = MagicMock()
    hook.on_error = MagicMock()
    return [hook]


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from tagstate.core.errors import BadTransition, TagStateError, TransitionError, ValidationError

    return (TagStateError, TransitionError, BadTransition, ValidationError)
