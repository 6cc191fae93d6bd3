"""Process-scoped logging state.

A Runtime owns the appender registry, the metric subscriber slot and the
default level used by loggers that have no level of their own. Loggers are
bound to a runtime when constructed; ``default_runtime()`` is the one used
when none is given.
"""

import atexit

from taglog.core.levels import Level, parse_level
from taglog.core.metrics import MetricSlot
from taglog.core.ports import MetricSubscriber
from taglog.core.registry import AppenderRegistry


class Runtime:
    """Registry, metric slot and default level shared by a set of loggers."""

    def __init__(self, default_level: "Level | str | int" = Level.INFO) -> None:
        self.registry = AppenderRegistry()
        self.metrics = MetricSlot()
        self._default_level = parse_level(default_level)

    @property
    def default_level(self) -> Level:
        return self._default_level

    @default_level.setter
    def default_level(self, value: "Level | str | int") -> None:
        self._default_level = parse_level(value)

    def on_metric(self, callback: MetricSubscriber | None) -> None:
        """Replace the process-wide metric subscriber."""
        self.metrics.subscribe(callback)

    def flush(self) -> None:
        """Flush every registered appender."""
        self.registry.flush()

    def close(self) -> None:
        """Flush, then close and remove every appender that supports it."""
        self.registry.flush()
        for registration in self.registry.list():
            close = getattr(registration.appender, "close", None)
            if callable(close):
                close()
        self.registry.clear()


_default_runtime = Runtime()
atexit.register(_default_runtime.flush)


def default_runtime() -> Runtime:
    """Return the process-scoped runtime."""
    return _default_runtime
