# tagstate/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Protocol, runtime_checkable

from tagstate.interfaces.types import Chunk, EventListener


@runtime_checkable
class EventSource(Protocol):
    """
    Streaming tag/text event source protocol.

    Methods:
        subscribe(listener): Start delivering events to the listener's callbacks.
        unsubscribe(listener): Stop delivering events to the listener.
        write(chunk): Feed more input; zero or more events may fire before it returns.
        end(): Signal end of input; fires any remaining events, then ``end``.

    Runtime Invariants:
    - Callbacks run synchronously on the caller's thread, in document order.
    - Each listener sees ``end`` at most once.

    Error Handling:
    - Exceptions raised by a listener propagate out of ``write``/``end``.
      The source does not attempt to recover from them.
    """

    def subscribe(self, listener: EventListener) -> None:
        """Register the four callbacks of ``listener``."""
        ...

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove ``listener``; unknown listeners are ignored."""
        ...

    def write(self, chunk: Chunk) -> None:
        """Feed a chunk of input."""
        ...

    def end(self) -> None:
        """Finish the input."""
        ...
