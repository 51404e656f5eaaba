from .protocols import EventSource
from .types import EventListener, Tag

__all__ = ["EventSource", "EventListener", "Tag"]
