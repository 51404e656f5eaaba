"""tagstate: table-driven state machines for event-driven tag/text parsing

This package provides a small generic state-machine engine and an adapter that
drives it from a streaming tag/text parser.

Responsibilities:
    - Transition table compilation and validation
    - Action dispatch with wildcard fallback
    - Handler invocation with explicit dispatch context
    - Translation of open-tag/close-tag/text/end events into actions

Interactions:
    - Client code through the public API
    - Streaming parsers through the EventSource protocol (lxml built in)
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - Machines are single-threaded; callers serialize shared access

    Error Handling:
        - Structured error hierarchy rooted at TagStateError
        - Errors propagate synchronously, never retried internally

    Logging:
        - Standard library logging, DEBUG level, no handlers installed
"""

from tagstate.core import (
    WILDCARD,
    BadTransition,
    BareState,
    DispatchContext,
    Handled,
    Hook,
    Machine,
    ReentrantDispatchError,
    StreamClosedError,
    TagStateError,
    TransitionError,
    TransitionTable,
    ValidationError,
)
from tagstate.interfaces import EventListener, EventSource, Tag
from tagstate.runtime import LxmlEventSource, StreamAdapter

__version__ = "0.1.0"

__all__ = [
    "WILDCARD",
    "BadTransition",
    "BareState",
    "DispatchContext",
    "Handled",
    "Hook",
    "Machine",
    "ReentrantDispatchError",
    "StreamClosedError",
    "TagStateError",
    "TransitionError",
    "TransitionTable",
    "ValidationError",
    "EventListener",
    "EventSource",
    "Tag",
    "LxmlEventSource",
    "StreamAdapter",
]
