"""NDJSON encoder for log entries."""

import json
from collections.abc import Iterable
from typing import Any

from taglog.core.models import LogEntry


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert a log entry to a JSON-compatible dict.

    Optional fields are only included when set.
    """
    obj: dict[str, Any] = {
        "timestamp": entry.timestamp,
        "level": entry.level.label,
        "name": entry.name,
        "message": entry.message,
        "pid": entry.process_id,
        "thread": entry.thread_name,
    }
    if entry.tags:
        obj["tags"] = list(entry.tags)
    if entry.payload:
        obj["payload"] = dict(entry.payload)
    if entry.duration is not None:
        obj["duration_ms"] = entry.duration
    if entry.detail is not None:
        obj["detail"] = entry.detail
    if entry.exception is not None:
        obj["exception"] = {
            "kind": entry.exception.kind,
            "message": entry.exception.detail,
        }
    if entry.metric is not None:
        obj["metric"] = entry.metric
    return obj


def encode_entry(entry: LogEntry) -> str:
    """Encode a single log entry as one JSON line (no trailing newline).

    Payload values that are not JSON serializable are rendered with ``str``.
    """
    return json.dumps(entry_to_dict(entry), default=str)


def encode_entries(entries: Iterable[LogEntry]) -> str:
    """Encode log entries to newline-delimited JSON.

    Args:
        entries: An iterable of LogEntry objects.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no entries.
    """
    lines = [encode_entry(entry) for entry in entries]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
