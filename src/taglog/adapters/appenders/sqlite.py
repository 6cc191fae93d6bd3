"""SQLite appender storing rendered lines."""

import sqlite3
import threading
import time
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager

import aiosqlite

from taglog.core.exceptions import AppenderWriteError

_LINES_SCHEMA = """
CREATE TABLE IF NOT EXISTS log_lines (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    written_at REAL NOT NULL,
    line TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_log_lines_written_at ON log_lines(written_at);
"""

_INSERT_LINE = """
INSERT INTO log_lines (written_at, line) VALUES (?, ?)
"""

_SELECT_LINES = """
SELECT line
FROM log_lines
WHERE written_at > ?
ORDER BY id ASC
"""

_COUNT_LINES = """
SELECT COUNT(*) FROM log_lines
"""


class SQLiteAppender:
    """SQLite implementation of AppenderPort.

    Lines are written synchronously with the standard sqlite3 module, so
    ``write`` returns only after the row is committed and ``flush`` has
    nothing left to do. Uses WAL mode for concurrent access.

    ``read`` uses aiosqlite for async consumers. For file-based databases,
    sync and async methods share the same file. For :memory: databases the
    sync connection is persistent and async reads see a separate, empty
    database, since in-memory databases are connection-scoped in SQLite.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._lock = threading.Lock()
        self._initialized = False
        self._memory_conn: sqlite3.Connection | None = None

    def _ensure_initialized(self) -> None:
        """Initialize database schema once. Caller holds the lock."""
        if self._initialized:
            return
        if self._db_path == ":memory:":
            # For :memory: DBs, keep a persistent connection
            self._memory_conn = sqlite3.connect(":memory:", check_same_thread=False)
            self._memory_conn.executescript(_LINES_SCHEMA)
        else:
            with sqlite3.connect(self._db_path) as db:
                db.execute("PRAGMA journal_mode=WAL")
                db.executescript(_LINES_SCHEMA)
        self._initialized = True

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Locked sync connection; file connections are closed afterwards."""
        with self._lock:
            self._ensure_initialized()
            if self._memory_conn is not None:
                yield self._memory_conn
                return
            conn = sqlite3.connect(self._db_path)
            try:
                yield conn
            finally:
                conn.close()

    def write(self, line: str) -> None:
        """Insert and commit a line.

        Raises:
            AppenderWriteError: If SQLite rejects the write.
        """
        try:
            with self._connection() as conn:
                conn.execute(_INSERT_LINE, (time.time(), line))
                conn.commit()
        except sqlite3.Error as exc:
            raise AppenderWriteError(f"Failed to write to {self._db_path}: {exc}") from exc

    def flush(self) -> None:
        """Writes are committed immediately; nothing is pending."""

    def read_sync(self, since: float = 0) -> list[str]:
        """Return lines written after ``since``, oldest first."""
        with self._connection() as conn:
            return [row[0] for row in conn.execute(_SELECT_LINES, (since,))]

    def count_sync(self) -> int:
        """Return total number of stored lines."""
        with self._connection() as conn:
            row = conn.execute(_COUNT_LINES).fetchone()
            return row[0] if row else 0

    async def read(self, since: float = 0) -> AsyncIterator[str]:
        """Read lines written after ``since`` without blocking the event loop."""
        if self._db_path == ":memory:":
            return
        with self._lock:
            self._ensure_initialized()
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(_SELECT_LINES, (since,)) as cursor:
                async for row in cursor:
                    yield row[0]

    def close(self) -> None:
        """Close the persistent connection (for :memory: databases)."""
        with self._lock:
            if self._memory_conn is not None:
                self._memory_conn.close()
                self._memory_conn = None
                self._initialized = False

    def __repr__(self) -> str:
        return f"SQLiteAppender({self._db_path!r})"
