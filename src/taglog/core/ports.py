"""Port interfaces for appenders and metric subscribers.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from taglog.core.models import LogEntry, MetricEvent


@runtime_checkable
class AppenderPort(Protocol):
    """Port for appenders receiving rendered log lines.

    Examples: InMemoryAppender, StreamAppender, QueuedAppender, SQLiteAppender.
    """

    def write(self, line: str) -> None:
        """Write one rendered line.

        Raises:
            AppenderWriteError: If the line could not be written.
        """
        ...

    def flush(self) -> None:
        """Block until every line written so far is durable."""
        ...


Formatter = Callable[[LogEntry], str]

MetricSubscriber = Callable[[MetricEvent], None]
