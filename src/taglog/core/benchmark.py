"""Benchmark engine: time a block and log its duration.

A Benchmark is both a context manager and a callable runner. Leaving the
``with`` body by any route, including ``return`` or an exception, measures
the duration and emits the entry before control leaves. Exceptions are
recorded on the entry and then propagate unchanged.
"""

import time
from collections.abc import Callable, Mapping
from types import TracebackType
from typing import TYPE_CHECKING, Any, TypeVar

from taglog.core.levels import Level, parse_level
from taglog.core.metrics import metric_event
from taglog.core.models import CapturedException, LogEntry

if TYPE_CHECKING:
    from taglog.core.logger import Logger

T = TypeVar("T")


class Benchmark:
    """Times a block of code and logs the elapsed milliseconds.

    Attributes:
        level: Level the entry is logged at.
        message: Log message.
        payload: Payload for the entry; may be extended inside the block.
        min_duration: Successful blocks faster than this (ms) are not logged.
        metric: Metric identifier reported to the metric subscriber.
        duration: Elapsed milliseconds once the block has finished.
        entry: The dispatched entry, or None if nothing was logged.
    """

    def __init__(
        self,
        logger: "Logger",
        level: "Level | str | int",
        message: str,
        payload: Mapping[str, Any] | None = None,
        min_duration: float = 0.0,
        metric: str | None = None,
    ) -> None:
        self.logger = logger
        self.level = parse_level(level)
        self.message = message
        self.payload: dict[str, Any] = dict(payload or {})
        self.min_duration = float(min_duration)
        self.metric = metric
        self.duration: float | None = None
        self.entry: LogEntry | None = None
        self._start: float | None = None

    def __enter__(self) -> "Benchmark":
        self._start = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if self._start is None:
            return False
        elapsed = (time.perf_counter() - self._start) * 1000.0
        self._start = None
        self.duration = round(elapsed, 1)
        self._finish(self.duration, exc_val)
        return False

    def __call__(self, block: Callable[[], T]) -> T:
        """Run ``block`` under the benchmark and return its result."""
        with self:
            return block()

    def _finish(self, duration: float, exc: BaseException | None) -> None:
        if not self.logger.admits_message(self.level, self.message):
            return
        if exc is None and duration < self.min_duration:
            return

        entry = self.logger.build_entry(
            self.level,
            self.message,
            self.payload,
            duration=self.duration,
            exception=CapturedException.from_exception(exc) if exc is not None else None,
            metric=self.metric,
        )
        if not self.logger.dispatch(entry):
            return
        self.entry = entry

        if self.metric is not None and exc is None:
            self.logger.runtime.metrics.emit(metric_event(entry))
