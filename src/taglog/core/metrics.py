"""Metric subscriber slot for benchmark metric events."""

import copy
import dataclasses
import logging
import threading

from taglog.core.models import LogEntry, MetricEvent
from taglog.core.ports import MetricSubscriber

_logger = logging.getLogger(__name__)


def _copy_event(event: MetricEvent) -> MetricEvent:
    """Copy an event so a subscriber cannot mutate the dispatched entry.

    Payload values that cannot be deep-copied (locks, sockets, open files)
    are shared; the payload mapping itself is always a new dict.
    """
    try:
        return copy.deepcopy(event)
    except Exception:
        entry = event.entry
        payload = dict(entry.payload) if entry.payload else None
        return dataclasses.replace(event, entry=dataclasses.replace(entry, payload=payload))


def metric_event(entry: LogEntry) -> MetricEvent:
    """Create a metric event from a dispatched benchmark entry.

    Args:
        entry: Entry carrying both a metric identifier and a duration.

    Returns:
        MetricEvent for the entry.
    """
    if entry.metric is None or entry.duration is None:
        raise ValueError("metric events need an entry with metric and duration")
    return MetricEvent(metric=entry.metric, duration=entry.duration, entry=entry)


class MetricSlot:
    """Holds at most one subscriber; setting a new one discards the old."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriber: MetricSubscriber | None = None

    @property
    def subscriber(self) -> MetricSubscriber | None:
        return self._subscriber

    def subscribe(self, callback: MetricSubscriber | None) -> None:
        """Replace the subscriber. ``None`` removes it."""
        if callback is not None and not callable(callback):
            raise TypeError("metric subscriber must be callable")
        with self._lock:
            self._subscriber = callback

    def emit(self, event: MetricEvent) -> bool:
        """Deliver a copy of the event to the current subscriber.

        A subscriber failure is reported and not raised.

        Returns:
            True if a subscriber received the event.
        """
        subscriber = self._subscriber
        if subscriber is None:
            return False
        try:
            subscriber(_copy_event(event))
        except Exception:
            _logger.exception("Metric subscriber failed for %r", event.metric)
        return True
