"""In-memory appender."""

import threading


class InMemoryAppender:
    """In-memory implementation of AppenderPort.

    Stores rendered lines in a list. Suitable for testing and for
    inspecting output in-process.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: list[str] = []
        self.flush_count = 0

    def write(self, line: str) -> None:
        """Store a rendered line."""
        with self._lock:
            self._lines.append(line)

    def flush(self) -> None:
        """Nothing is buffered; only counts calls."""
        self.flush_count += 1

    @property
    def lines(self) -> list[str]:
        """Copy of every line written so far."""
        with self._lock:
            return list(self._lines)

    @property
    def message(self) -> str | None:
        """The last line written, or None."""
        with self._lock:
            return self._lines[-1] if self._lines else None

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()
