"""Queued appender that writes from a background thread."""

import logging
import queue
import threading

from taglog.core.ports import AppenderPort

_logger = logging.getLogger(__name__)

_STOP = object()


class QueuedAppender:
    """Hands lines to a worker thread that writes them to a target appender.

    Logging callers only pay for a queue put. ``flush()`` blocks until the
    worker has written every queued line and the target has flushed.

    Args:
        target: Appender receiving the lines.
        max_size: Queue bound; 0 means unbounded. When full, ``write`` blocks.
    """

    def __init__(self, target: AppenderPort, max_size: int = 0) -> None:
        self.target = target
        self._queue: queue.Queue[object] = queue.Queue(maxsize=max_size)
        self._closed = False
        # Serialises the closed check with the put, so no line lands after _STOP
        self._state_lock = threading.Lock()
        self._thread = threading.Thread(
            target=self._run, name=f"taglog-{type(target).__name__}", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self.target.write(item)  # type: ignore[arg-type]
            except Exception:
                _logger.exception("Queued write to %r failed", self.target)
            finally:
                self._queue.task_done()

    def write(self, line: str) -> None:
        """Queue a line for the worker.

        Raises:
            RuntimeError: If the appender has been closed.
        """
        with self._state_lock:
            if self._closed:
                raise RuntimeError("QueuedAppender is closed")
            self._queue.put(line)

    def flush(self) -> None:
        """Wait until every queued line is written, then flush the target."""
        self._queue.join()
        self.target.flush()

    @property
    def pending(self) -> int:
        """Approximate number of lines not yet written."""
        return self._queue.qsize()

    def close(self) -> None:
        """Drain the queue and stop the worker thread."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._thread.join()
        self.target.flush()
