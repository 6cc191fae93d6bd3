"""Logger facade: level gating, entry construction and dispatch."""

from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from types import ModuleType
from typing import Any

from taglog.core.benchmark import Benchmark
from taglog.core.context import current_payload, current_tags, with_tags
from taglog.core.context import with_payload as _with_payload
from taglog.core.filters import Filter, PatternFilter, PredicateFilter, admits, coerce_filter
from taglog.core.levels import Level, at_least, parse_level, rank
from taglog.core.models import CapturedException, LogEntry, build_entry
from taglog.core.runtime import Runtime, default_runtime

Block = Callable[[], Any]


def logger_name(source: object) -> str:
    """Derive a logger name from a string, class, module or instance."""
    if isinstance(source, str):
        return source
    if isinstance(source, type):
        return source.__name__
    if isinstance(source, ModuleType):
        return source.__name__
    return type(source).__name__


class Logger:
    """Named logging facade bound to a runtime.

    Loggers are cheap values; several may share a name. All of them send
    entries through the appender registry of their runtime.

    Example:
        ```python
        logger = Logger(OrderService)
        logger.info("Order placed", {"order_id": 42})
        with logger.tagged("batch-7"):
            logger.benchmark_info("Reindex", reindex, min_duration=100)
        ```
    """

    def __init__(
        self,
        name: object,
        level: "Level | str | int | None" = None,
        filter: object = None,
        runtime: Runtime | None = None,
    ) -> None:
        """Initialize the logger.

        Args:
            name: Logger name, or a class/module/instance to take it from.
            level: Own minimum level; None follows the runtime default.
            filter: Optional pattern or predicate applied before dispatch.
            runtime: Runtime to dispatch through (default: process runtime).
        """
        self.name = logger_name(name)
        self.runtime = runtime or default_runtime()
        self._level: Level | None = None if level is None else parse_level(level)
        self.filter: Filter | None = coerce_filter(filter)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"Logger(name={self.name!r}, level={self.level.label!r})"

    @property
    def level(self) -> Level:
        """Effective minimum level."""
        if self._level is None:
            return self.runtime.default_level
        return self._level

    @level.setter
    def level(self, value: "Level | str | int | None") -> None:
        self._level = None if value is None else parse_level(value)

    min_level = level

    @property
    def level_index(self) -> int:
        return rank(self.level)

    def enabled(self, level: "Level | str | int") -> bool:
        """Return True if messages at ``level`` pass this logger's threshold."""
        return at_least(parse_level(level), self.level)

    # Context

    def tagged(self, *tags: str) -> AbstractContextManager[tuple[str, ...]]:
        """Context manager adding tags to every entry logged inside it."""
        return with_tags(*tags)

    def with_payload(
        self, payload: Mapping[str, Any] | None = None, **fields: Any
    ) -> AbstractContextManager[dict[str, Any]]:
        """Context manager adding payload to every entry logged inside it."""
        return _with_payload(payload, **fields)

    @property
    def tags(self) -> list[str]:
        return list(current_tags())

    @property
    def payload(self) -> dict[str, Any] | None:
        return current_payload()

    # Entry construction and dispatch

    def admits_message(self, level: Level, message: str) -> bool:
        """Check level and pattern filter before anything is built."""
        if not at_least(level, self.level):
            return False
        if isinstance(self.filter, PatternFilter):
            return self.filter.matches(self.name, message)
        return True

    def build_entry(
        self,
        level: Level,
        message: str,
        payload: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> LogEntry:
        """Build an entry with the ambient tags and payload.

        Explicit payload keys override ambient ones.
        """
        merged = {**(current_payload() or {}), **(payload or {})}
        return build_entry(
            level, self.name, str(message), merged or None, current_tags(), **fields
        )

    def dispatch(self, entry: LogEntry) -> bool:
        """Send an entry to the registry unless a logger predicate rejects it.

        Returns:
            False if the logger's own filter rejected the entry.
        """
        if isinstance(self.filter, PredicateFilter) and not admits(self.filter, entry):
            return False
        self.runtime.registry.dispatch(entry)
        return True

    def log(
        self,
        level: "Level | str | int",
        message: str,
        payload: Mapping[str, Any] | None = None,
        block: Block | None = None,
        exception: BaseException | None = None,
    ) -> Any:
        """Log a message.

        Args:
            level: Level of the message.
            message: The log message.
            payload: Structured fields; override ambient payload keys.
            block: Called only when the message is logged; its return value
                is appended to the message.
            exception: Exception to record on the entry.

        Returns:
            The block's return value if a block was given, else the message.
            None when the message is filtered out.

        Raises:
            InvalidLevel: If ``level`` is not recognised.
        """
        level = parse_level(level)
        if not self.admits_message(level, message):
            return None

        captured = None
        if exception is not None:
            captured = CapturedException.from_exception(exception)
        if block is None:
            self.dispatch(self.build_entry(level, message, payload, exception=captured))
            return message

        try:
            result = block()
        except Exception as exc:
            self.dispatch(
                self.build_entry(
                    level,
                    message,
                    payload,
                    exception=CapturedException.from_exception(exc),
                )
            )
            raise
        detail = None if result is None else str(result)
        self.dispatch(
            self.build_entry(level, message, payload, detail=detail, exception=captured)
        )
        return result

    def trace(self, message: str, payload: Mapping[str, Any] | None = None,
              block: Block | None = None, exception: BaseException | None = None) -> Any:
        return self.log(Level.TRACE, message, payload, block, exception)

    def debug(self, message: str, payload: Mapping[str, Any] | None = None,
              block: Block | None = None, exception: BaseException | None = None) -> Any:
        return self.log(Level.DEBUG, message, payload, block, exception)

    def info(self, message: str, payload: Mapping[str, Any] | None = None,
             block: Block | None = None, exception: BaseException | None = None) -> Any:
        return self.log(Level.INFO, message, payload, block, exception)

    def warn(self, message: str, payload: Mapping[str, Any] | None = None,
             block: Block | None = None, exception: BaseException | None = None) -> Any:
        return self.log(Level.WARN, message, payload, block, exception)

    warning = warn

    def error(self, message: str, payload: Mapping[str, Any] | None = None,
              block: Block | None = None, exception: BaseException | None = None) -> Any:
        return self.log(Level.ERROR, message, payload, block, exception)

    def fatal(self, message: str, payload: Mapping[str, Any] | None = None,
              block: Block | None = None, exception: BaseException | None = None) -> Any:
        return self.log(Level.FATAL, message, payload, block, exception)

    # Benchmarks

    def benchmark(
        self,
        level: "Level | str | int",
        message: str,
        block: Block | None = None,
        *,
        payload: Mapping[str, Any] | None = None,
        min_duration: float = 0.0,
        metric: str | None = None,
    ) -> Any:
        """Time a block and log how long it took.

        Args:
            level: Level of the benchmark entry.
            message: The log message.
            block: Callable to time. When omitted, the Benchmark itself is
                returned for use as a context manager.
            payload: Structured fields for the entry.
            min_duration: Successful blocks faster than this many
                milliseconds are not logged.
            metric: Metric identifier reported on success.

        Returns:
            The block's return value, or the Benchmark if no block was given.
        """
        bench = Benchmark(
            self,
            level,
            message,
            payload=payload,
            min_duration=min_duration,
            metric=metric,
        )
        if block is None:
            return bench
        return bench(block)

    def benchmark_trace(self, message: str, block: Block | None = None, **options: Any) -> Any:
        return self.benchmark(Level.TRACE, message, block, **options)

    def benchmark_debug(self, message: str, block: Block | None = None, **options: Any) -> Any:
        return self.benchmark(Level.DEBUG, message, block, **options)

    def benchmark_info(self, message: str, block: Block | None = None, **options: Any) -> Any:
        return self.benchmark(Level.INFO, message, block, **options)

    def benchmark_warn(self, message: str, block: Block | None = None, **options: Any) -> Any:
        return self.benchmark(Level.WARN, message, block, **options)

    def benchmark_error(self, message: str, block: Block | None = None, **options: Any) -> Any:
        return self.benchmark(Level.ERROR, message, block, **options)

    def benchmark_fatal(self, message: str, block: Block | None = None, **options: Any) -> Any:
        return self.benchmark(Level.FATAL, message, block, **options)
