"""taglog: structured logging with tags, payloads and benchmarks.

Loggers format leveled entries, attach the tags and payload active in the
current thread or task, and route them through a process-wide registry of
appenders. Benchmarks time a block, log its duration and report metrics.

Example:
    ```python
    import taglog
    from taglog.adapters.appenders import StreamAppender

    taglog.add_appender(StreamAppender())
    logger = taglog.get_logger(__name__)

    with logger.tagged("job-42"):
        rows = logger.benchmark_info("Load rows", load_rows, metric="/load/rows")
    ```
"""

from collections.abc import Sequence

from taglog.core import (
    LEVELS,
    AppenderWriteError,
    Benchmark,
    CapturedException,
    InvalidLevel,
    Level,
    LogEntry,
    Logger,
    MetricEvent,
    PatternFilter,
    PredicateFilter,
    Registration,
    Runtime,
    current_payload,
    current_tags,
    default_runtime,
    format_entry,
    from_external,
    to_external,
    with_payload,
    with_tags,
)
from taglog.core.ports import AppenderPort, Formatter, MetricSubscriber


def get_logger(
    name: object, level: "Level | str | int | None" = None, filter: object = None
) -> Logger:
    """Return a logger bound to the process runtime."""
    return Logger(name, level=level, filter=filter)


def add_appender(
    appender: AppenderPort, filter: object = None, formatter: Formatter | None = None
) -> Registration:
    """Register an appender with the process runtime."""
    return default_runtime().registry.add(appender, filter=filter, formatter=formatter)


def remove_appender(target: "Registration | AppenderPort") -> bool:
    """Remove an appender from the process runtime."""
    return default_runtime().registry.remove(target)


def appenders() -> Sequence[Registration]:
    """Snapshot of the process runtime's registrations."""
    return default_runtime().registry.list()


def flush() -> None:
    """Flush every appender of the process runtime."""
    default_runtime().flush()


def on_metric(callback: MetricSubscriber | None) -> None:
    """Set the process-wide metric subscriber, replacing any previous one."""
    default_runtime().on_metric(callback)


def default_level() -> Level:
    return default_runtime().default_level


def set_default_level(level: "Level | str | int") -> None:
    default_runtime().default_level = level


__all__ = [
    "LEVELS",
    "AppenderWriteError",
    "Benchmark",
    "CapturedException",
    "InvalidLevel",
    "Level",
    "LogEntry",
    "Logger",
    "MetricEvent",
    "PatternFilter",
    "PredicateFilter",
    "Registration",
    "Runtime",
    "add_appender",
    "appenders",
    "current_payload",
    "current_tags",
    "default_level",
    "default_runtime",
    "flush",
    "format_entry",
    "from_external",
    "get_logger",
    "on_metric",
    "remove_appender",
    "set_default_level",
    "to_external",
    "with_payload",
    "with_tags",
]
