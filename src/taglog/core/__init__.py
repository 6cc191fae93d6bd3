"""Logging core: levels, context, entries, registry, loggers and benchmarks."""

from taglog.core.benchmark import Benchmark
from taglog.core.context import (
    context_depth,
    current_payload,
    current_tags,
    with_payload,
    with_tags,
)
from taglog.core.exceptions import AppenderWriteError, InvalidLevel
from taglog.core.filters import (
    PatternFilter,
    PredicateFilter,
    admits,
    coerce_filter,
    pattern_filter,
)
from taglog.core.formatting import format_entry
from taglog.core.levels import (
    LEVELS,
    Level,
    at_least,
    from_external,
    parse_level,
    rank,
    to_external,
)
from taglog.core.logger import Logger
from taglog.core.models import CapturedException, LogEntry, MetricEvent
from taglog.core.registry import AppenderRegistry, Registration
from taglog.core.runtime import Runtime, default_runtime

__all__ = [
    "LEVELS",
    "AppenderRegistry",
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
    "admits",
    "at_least",
    "coerce_filter",
    "context_depth",
    "current_payload",
    "current_tags",
    "default_runtime",
    "format_entry",
    "from_external",
    "parse_level",
    "pattern_filter",
    "rank",
    "to_external",
    "with_payload",
    "with_tags",
]
