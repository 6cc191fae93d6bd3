"""Text rendering of log entries.

Rendered line layout::

    <timestamp> <L> [<pid>:<thread>] [<tag>]... (<duration>ms) <name> -- <message>
        [ -- <detail>][ -- Exception: <Kind>: <detail>][ -- <payload>]

Parsers of log output depend on this field order and on the bracket and
`` -- `` delimiters.
"""

from datetime import datetime

from taglog.core.models import LogEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def format_timestamp(timestamp: float) -> str:
    """Render a Unix timestamp as local time with microseconds."""
    return datetime.fromtimestamp(timestamp).strftime(TIMESTAMP_FORMAT)


def format_duration(duration: float) -> str:
    return f"({duration:.1f}ms)"


def format_entry(entry: LogEntry) -> str:
    """Render a log entry to the canonical text line.

    Args:
        entry: The entry to render.

    Returns:
        Single line of text without a trailing newline.
    """
    parts = [
        format_timestamp(entry.timestamp),
        entry.level.char,
        f"[{entry.process_id}:{entry.thread_name}]",
    ]
    parts.extend(f"[{tag}]" for tag in entry.tags)
    if entry.duration is not None:
        parts.append(format_duration(entry.duration))
    parts.append(entry.name)

    message = [entry.message]
    if entry.detail is not None:
        message.append(entry.detail)
    if entry.exception is not None:
        message.append(f"Exception: {entry.exception.kind}: {entry.exception.detail}")
    if entry.payload:
        message.append(repr(dict(entry.payload)))

    return " ".join(parts) + " -- " + " -- ".join(message)
