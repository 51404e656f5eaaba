# tagstate/runtime/adapter.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from tagstate.core.errors import StreamClosedError
from tagstate.core.machine import Machine
from tagstate.core.table import TransitionTable
from tagstate.interfaces.protocols import EventSource
from tagstate.interfaces.types import (
    CLOSE_TAG_PREFIX,
    END_ACTION,
    OPEN_TAG_PREFIX,
    TEXT_ACTION,
    Chunk,
    EventListener,
    Tag,
)

logger = logging.getLogger(__name__)


class StreamAdapter:
    """
    Drives a :class:`Machine` from a streaming tag/text event source.

    Events are translated into actions as follows:

    ===============  =================  ==========
    event            action             arguments
    ===============  =================  ==========
    open-tag(tag)    ``"o:" + name``    ``(tag,)``
    close-tag(name)  ``"c:" + name``    ``()``
    text(data)       ``"t"``            ``(data,)``
    end()            ``"e"``            ``()``
    ===============  =================  ==========

    Every event triggers exactly one dispatch before the source moves on.
    Errors raised by the machine, BadTransition included, propagate out of
    the source's ``write``/``end`` call unchanged.

    The subscription lasts until the ``end`` event has been handled or
    :meth:`close` is called, whichever comes first.
    """

    def __init__(
        self,
        source: EventSource,
        table: Union[TransitionTable, Mapping[str, Mapping[str, Any]]],
        initial_state: str,
        data: Any = None,
        hooks: Optional[List[Any]] = None,
    ) -> None:
        """
        :param source: The event source to subscribe to.
        :param table: Transition table for the machine.
        :param initial_state: The machine's starting state.
        :param data: Initial state data for handlers.
        :param hooks: Hooks passed through to the machine.
        """
        self._source = source
        self._machine = Machine(table, initial_state, data=data, hooks=hooks)
        self._listener = EventListener(
            open_tag=self._on_open_tag,
            close_tag=self._on_close_tag,
            text=self._on_text,
            end=self._on_end,
        )
        self._closed = False
        source.subscribe(self._listener)
        logger.debug("Subscribed to %r in state %r", source, initial_state)

    @property
    def machine(self) -> Machine:
        return self._machine

    @property
    def state(self) -> Any:
        return self._machine.state

    @property
    def data(self) -> Any:
        return self._machine.data

    @property
    def source(self) -> EventSource:
        return self._source

    @property
    def closed(self) -> bool:
        """True once the subscription has been torn down."""
        return self._closed

    def write(self, chunk: Chunk) -> None:
        """
        Feed a chunk of input to the event source.

        :raises StreamClosedError: If the adapter has already been torn down.
        """
        self._check_open()
        self._source.write(chunk)

    def end(self) -> None:
        """
        Signal end of input to the event source. The resulting ``end`` event
        dispatches ``"e"`` and tears the subscription down.

        :raises StreamClosedError: If the adapter has already been torn down.
        """
        self._check_open()
        self._source.end()

    def close(self) -> None:
        """Unsubscribe from the event source. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._source.unsubscribe(self._listener)
        logger.debug("Unsubscribed from %r in state %r", self._source, self._machine.state)

    def _check_open(self) -> None:
        if self._closed:
            raise StreamClosedError("Stream adapter is closed")

    def _on_open_tag(self, tag: Tag) -> None:
        self._machine.dispatch(OPEN_TAG_PREFIX + tag.name, tag)

    def _on_close_tag(self, name: str) -> None:
        self._machine.dispatch(CLOSE_TAG_PREFIX + name)

    def _on_text(self, data: str) -> None:
        self._machine.dispatch(TEXT_ACTION, data)

    def _on_end(self) -> None:
        try:
            self._machine.dispatch(END_ACTION)
        finally:
            self.close()

    def __enter__(self) -> "StreamAdapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"StreamAdapter(state={self._machine.state!r}, closed={self._closed})"
