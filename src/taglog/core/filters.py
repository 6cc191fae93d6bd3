"""Entry filters deciding whether an entry reaches an appender or logger.

A filter is one of three variants: ``None`` (admit everything), a
``PatternFilter`` or a ``PredicateFilter``. ``admits`` is the single admission
check used by loggers and by the appender registry.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from taglog.core.models import LogEntry

_logger = logging.getLogger(__name__)

Predicate = Callable[[LogEntry], object]


@dataclass(frozen=True)
class PatternFilter:
    """Admit entries whose message (or logger name) matches a pattern.

    Attributes:
        pattern: Compiled regular expression, searched anywhere in the field.
        field: Entry field to match, ``"message"`` or ``"name"``.
    """

    pattern: re.Pattern[str]
    field: Literal["message", "name"] = "message"

    def matches(self, name: str, message: str) -> bool:
        """Match against raw values, before an entry has been built."""
        target = name if self.field == "name" else message
        return self.pattern.search(target) is not None


@dataclass(frozen=True)
class PredicateFilter:
    """Admit entries for which a callable returns a truthy value."""

    predicate: Predicate


Filter = PatternFilter | PredicateFilter


def pattern_filter(
    pattern: "str | re.Pattern[str]", field: Literal["message", "name"] = "message"
) -> PatternFilter:
    """Create a PatternFilter, compiling string patterns."""
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    if field not in ("message", "name"):
        raise ValueError(f"Unsupported filter field: {field!r}")
    return PatternFilter(pattern=pattern, field=field)


def coerce_filter(value: "Filter | re.Pattern[str] | str | Predicate | None") -> Filter | None:
    """Turn a pattern, a string or a callable into a filter.

    Raises:
        TypeError: If the value is none of the supported kinds.
    """
    if value is None or isinstance(value, (PatternFilter, PredicateFilter)):
        return value
    if isinstance(value, (str, re.Pattern)):
        return pattern_filter(value)
    if callable(value):
        return PredicateFilter(predicate=value)
    raise TypeError(f"filter must be a pattern or a callable, got {type(value).__name__}")


def admits(entry_filter: Filter | None, entry: LogEntry) -> bool:
    """Return True if the filter lets the entry through.

    Predicates are called on every check. A predicate that raises is
    reported and treated as a rejection.
    """
    if entry_filter is None:
        return True
    if isinstance(entry_filter, PatternFilter):
        return entry_filter.matches(entry.name, entry.message)
    try:
        return bool(entry_filter.predicate(entry))
    except Exception:
        _logger.exception("Filter predicate failed for logger %r", entry.name)
        return False
