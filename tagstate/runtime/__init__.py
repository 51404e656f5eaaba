"""
Runtime pieces that feed a Machine from streaming input.
"""

from .adapter import StreamAdapter
from .sources import LxmlEventSource

__all__ = ["StreamAdapter", "LxmlEventSource"]
