"""Process-wide appender registry and flush coordination."""

import logging
import threading
from dataclasses import dataclass, field
from itertools import count

from taglog.core.filters import Filter, admits, coerce_filter
from taglog.core.formatting import format_entry
from taglog.core.models import LogEntry
from taglog.core.ports import AppenderPort, Formatter

_logger = logging.getLogger(__name__)

_ids = count(1)


@dataclass(eq=False)
class Registration:
    """Handle for an appender attached to a registry.

    ``filter`` may be replaced after registration; the new value applies to
    the next dispatched entry.
    """

    appender: AppenderPort
    filter: Filter | None = None
    formatter: Formatter = format_entry
    id: int = field(default_factory=lambda: next(_ids))

    def __setattr__(self, name: str, value: object) -> None:
        if name == "filter":
            value = coerce_filter(value)  # type: ignore[arg-type]
        super().__setattr__(name, value)


class AppenderRegistry:
    """Ordered set of active appenders.

    Mutations are serialised by a lock and replace an immutable tuple, so
    readers always iterate a consistent snapshot while other threads add or
    remove appenders.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._registrations: tuple[Registration, ...] = ()

    def add(
        self,
        appender: AppenderPort,
        filter: object = None,
        formatter: Formatter | None = None,
    ) -> Registration:
        """Register an appender.

        Args:
            appender: Object implementing AppenderPort.
            filter: Optional pattern, callable or Filter gating entries.
            formatter: Renders entries for this appender (default: text line).

        Returns:
            Registration handle used to remove the appender.
        """
        registration = Registration(
            appender=appender,
            filter=coerce_filter(filter),  # type: ignore[arg-type]
            formatter=formatter or format_entry,
        )
        with self._lock:
            self._registrations = self._registrations + (registration,)
        return registration

    def remove(self, target: "Registration | AppenderPort") -> bool:
        """Remove a registration, or every registration of an appender.

        Returns:
            True if anything was removed.
        """
        with self._lock:
            remaining = tuple(
                r
                for r in self._registrations
                if r is not target and r.appender is not target
            )
            removed = len(remaining) != len(self._registrations)
            self._registrations = remaining
        return removed

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock:
            self._registrations = ()

    def list(self) -> tuple[Registration, ...]:
        """Return a snapshot of the current registrations, in insertion order."""
        return self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def dispatch(self, entry: LogEntry) -> int:
        """Deliver an entry to every appender whose filter admits it.

        Failures are reported per appender and never stop delivery to the
        remaining appenders.

        Returns:
            Number of appenders that accepted the line.
        """
        delivered = 0
        # keyed by id so unhashable callables work as formatters
        rendered: dict[int, str] = {}
        for registration in self._registrations:
            if not admits(registration.filter, entry):
                continue
            try:
                key = id(registration.formatter)
                line = rendered.get(key)
                if line is None:
                    line = rendered[key] = registration.formatter(entry)
                registration.appender.write(line)
            except Exception:
                _logger.exception(
                    "Appender %r failed to write entry from %r",
                    registration.appender,
                    entry.name,
                )
                continue
            delivered += 1
        return delivered

    def flush(self) -> None:
        """Flush every registered appender and wait for all of them.

        A failing appender is reported and the remaining ones are still
        flushed.
        """
        for registration in self._registrations:
            try:
                registration.appender.flush()
            except Exception:
                _logger.exception("Appender %r failed to flush", registration.appender)
