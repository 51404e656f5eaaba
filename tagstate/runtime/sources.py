# tagstate/runtime/sources.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from lxml import etree

from tagstate.core.errors import StreamClosedError
from tagstate.interfaces.types import Chunk, EventListener, Tag

logger = logging.getLogger(__name__)


class LxmlEventSource:
    """
    Streaming tag/text event source backed by lxml's feed parser.

    Input is pushed with :meth:`write` and finished with :meth:`end`; each
    parser callback is forwarded synchronously to every subscribed listener.
    Text between tags may arrive as several ``text`` events.

    Exceptions raised by listeners are stored by lxml and re-raised from the
    ``write``/``end`` call that triggered them.
    """

    def __init__(
        self,
        skip_whitespace: bool = False,
        resolve_entities: bool = False,
        encoding: Optional[str] = None,
    ) -> None:
        """
        :param skip_whitespace: Drop text events that contain only whitespace.
        :param resolve_entities: Let lxml resolve external entities.
        :param encoding: Override the document encoding for byte input.
        """
        self._skip_whitespace = skip_whitespace
        self._listeners: List[EventListener] = []
        self._ended = False
        self._parser = etree.XMLParser(
            target=_ParserTarget(self),
            resolve_entities=resolve_entities,
            no_network=True,
            encoding=encoding,
        )

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def listeners(self) -> List[EventListener]:
        return list(self._listeners)

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def write(self, chunk: Chunk) -> None:
        """
        Feed a chunk of XML.

        :raises StreamClosedError: If :meth:`end` has already been called.
        :raises lxml.etree.XMLSyntaxError: If the input is not well formed.
        """
        if self._ended:
            raise StreamClosedError("Cannot write to an event source after end()")
        self._parser.feed(chunk)

    def end(self) -> None:
        """
        Finish parsing. Any pending events are delivered, followed by ``end``.
        ``end`` is only delivered once the parser has closed cleanly.

        :raises StreamClosedError: If :meth:`end` has already been called.
        :raises lxml.etree.XMLSyntaxError: If the input is not well formed.
        """
        if self._ended:
            raise StreamClosedError("Event source has already ended")
        self._ended = True
        self._parser.close()
        self._emit_end()

    # Listeners may unsubscribe while being notified, so iterate over a copy.

    def _emit_open_tag(self, tag: Tag) -> None:
        for listener in list(self._listeners):
            listener.open_tag(tag)

    def _emit_close_tag(self, name: str) -> None:
        for listener in list(self._listeners):
            listener.close_tag(name)

    def _emit_text(self, data: str) -> None:
        if self._skip_whitespace and not data.strip():
            return
        for listener in list(self._listeners):
            listener.text(data)

    def _emit_end(self) -> None:
        logger.debug("End of stream, notifying %d listener(s)", len(self._listeners))
        for listener in list(self._listeners):
            listener.end()


class _ParserTarget:
    """
    Internal lxml parser target translating parser callbacks into source events.
    """

    def __init__(self, source: LxmlEventSource) -> None:
        self._source = source

    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        self._source._emit_open_tag(Tag(tag, dict(attrib)))

    def end(self, tag: str) -> None:
        self._source._emit_close_tag(tag)

    def data(self, data: str) -> None:
        self._source._emit_text(data)

    def close(self) -> Any:
        # lxml also calls this when a callback raises or the input is malformed,
        # so the end event is emitted by LxmlEventSource.end() instead.
        return None
