"""Ring buffer appender.

Provides bounded in-memory storage that automatically evicts oldest
lines when the buffer is full. Useful for production services that
need predictable memory usage, e.g. to attach recent logs to an error report.
"""

import threading
from collections import deque


class RingBufferAppender:
    """Ring buffer implementation of AppenderPort.

    Stores rendered lines in a fixed-size circular buffer. When the buffer
    is full, the oldest line is automatically evicted to make room for
    new lines.

    Args:
        max_size: Maximum number of lines to keep.
    """

    def __init__(self, max_size: int) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._lock = threading.Lock()
        self._buffer: deque[str] = deque(maxlen=max_size)

    def write(self, line: str) -> None:
        """Append a line, evicting the oldest when full."""
        with self._lock:
            self._buffer.append(line)

    def flush(self) -> None:
        """Nothing to flush; lines are held in memory."""

    def read(self) -> list[str]:
        """Return retained lines, oldest first."""
        with self._lock:
            return list(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
