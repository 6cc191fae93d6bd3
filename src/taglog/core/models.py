"""Core domain models for log entries and metric events."""

import os
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from taglog.core.levels import Level


@dataclass(frozen=True)
class CapturedException:
    """An exception recorded on a log entry.

    Attributes:
        kind: Exception class name (e.g., RuntimeError).
        detail: The exception message.
    """

    kind: str
    detail: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "CapturedException":
        """Capture the class name and message of an exception."""
        return cls(kind=type(exc).__name__, detail=str(exc))


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Level the entry was logged at.
        name: Name of the logger that produced the entry.
        message: The log message.
        payload: Merged payload mapping, or None when there is none.
        tags: Active tags, outer to inner.
        duration: Elapsed milliseconds for benchmark entries.
        exception: Exception raised by the logged or benchmarked block.
        metric: Metric identifier supplied to a benchmark.
        detail: String form of a message block's return value.
        thread_name: Name of the thread that logged the entry.
        process_id: Id of the process that logged the entry.
    """

    timestamp: float
    level: Level
    name: str
    message: str
    payload: Mapping[str, Any] | None = None
    tags: tuple[str, ...] = ()
    duration: float | None = None
    exception: CapturedException | None = None
    metric: str | None = None
    detail: str | None = None
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)
    process_id: int = field(default_factory=os.getpid)


@dataclass(frozen=True)
class MetricEvent:
    """A benchmark duration reported to the metric subscriber.

    Attributes:
        metric: Metric identifier (e.g., /my/custom/metric).
        duration: Elapsed milliseconds.
        entry: The log entry that was dispatched for the benchmark.
    """

    metric: str
    duration: float
    entry: LogEntry


def build_entry(
    level: Level,
    name: str,
    message: str,
    payload: Mapping[str, Any] | None = None,
    tags: tuple[str, ...] = (),
    **fields: Any,
) -> LogEntry:
    """Create a log entry with automatic timestamp.

    Args:
        level: Level of the entry.
        name: Logger name.
        message: The log message.
        payload: Merged payload, copied so later changes do not leak in.
        tags: Active tags.
        **fields: Remaining optional LogEntry fields.

    Returns:
        LogEntry with current timestamp
    """
    return LogEntry(
        timestamp=time.time(),
        level=level,
        name=name,
        message=message,
        payload=dict(payload) if payload else None,
        tags=tuple(tags),
        **fields,
    )
