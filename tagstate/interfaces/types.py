# tagstate/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple, Union

Chunk = Union[str, bytes]

# Action prefixes produced by the stream adapter
OPEN_TAG_PREFIX = "o:"
CLOSE_TAG_PREFIX = "c:"
TEXT_ACTION = "t"
END_ACTION = "e"


class Tag(NamedTuple):
    """An opening tag as reported by an event source."""

    name: str
    attributes: Mapping[str, str] = MappingProxyType({})


class EventListener(NamedTuple):
    """
    The four callback slots an event source notifies. Registered as a unit
    with ``EventSource.subscribe`` and removed with ``EventSource.unsubscribe``.
    """

    open_tag: Callable[[Tag], Any]
    close_tag: Callable[[str], Any]
    text: Callable[[str], Any]
    end: Callable[[], Any]
