"""Stream appender for consoles and open text files."""

import sys
import threading
from typing import TextIO

from taglog.core.exceptions import AppenderWriteError


class StreamAppender:
    """Writes each line, newline terminated, to a text stream.

    Writes are serialised with a lock so a single instance can be driven
    from several threads without interleaving lines.

    Args:
        stream: Target stream (default: ``sys.stderr`` at write time).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def write(self, line: str) -> None:
        """Write a line to the stream.

        Raises:
            AppenderWriteError: If the stream is closed or fails.
        """
        try:
            with self._lock:
                self.stream.write(line + "\n")
        except (OSError, ValueError) as exc:
            raise AppenderWriteError(f"Failed to write to {self.stream!r}: {exc}") from exc

    def flush(self) -> None:
        try:
            with self._lock:
                self.stream.flush()
        except (OSError, ValueError) as exc:
            raise AppenderWriteError(f"Failed to flush {self.stream!r}: {exc}") from exc

    def __repr__(self) -> str:
        return f"StreamAppender({getattr(self.stream, 'name', self.stream)!r})"
