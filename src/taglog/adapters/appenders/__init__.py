"""Appenders implementing the core AppenderPort."""

from taglog.adapters.appenders.in_memory import InMemoryAppender
from taglog.adapters.appenders.queued import QueuedAppender
from taglog.adapters.appenders.ring_buffer import RingBufferAppender
from taglog.adapters.appenders.sqlite import SQLiteAppender
from taglog.adapters.appenders.stream import StreamAppender

__all__ = [
    "InMemoryAppender",
    "QueuedAppender",
    "RingBufferAppender",
    "SQLiteAppender",
    "StreamAppender",
]
