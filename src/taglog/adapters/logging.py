"""Python logging handler adapter for taglog.

This adapter bridges Python's standard library logging module to taglog
loggers, so records from libraries using stdlib logging reach the same
appenders, with the ambient tags and payload attached.
"""

import logging

from taglog.core.levels import Level, from_external
from taglog.core.logger import Logger
from taglog.core.runtime import Runtime

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# Diagnostics from taglog itself are never forwarded, so a failing appender
# cannot feed its own error reports back into the registry.
_INTERNAL_PREFIX = "taglog"


class TaglogHandler(logging.Handler):
    """Logging handler that forwards log records to taglog loggers.

    Example:
        ```python
        from taglog import add_appender
        from taglog.adapters.appenders import InMemoryAppender
        from taglog.adapters.logging import TaglogHandler

        add_appender(InMemoryAppender())
        logging.getLogger().addHandler(TaglogHandler())
        ```
    """

    def __init__(self, runtime: Runtime | None = None, level: int = logging.NOTSET) -> None:
        """Initialize the handler.

        Args:
            runtime: Runtime whose appenders receive the records
                (default: the process runtime).
            level: Handler level, as for any logging.Handler.
        """
        super().__init__(level)
        self._runtime = runtime
        self._loggers: dict[str, Logger] = {}

    def _logger_for(self, name: str) -> Logger:
        logger = self._loggers.get(name)
        if logger is None:
            # stdlib logging has already applied its own levels
            logger = Logger(name, level=Level.TRACE, runtime=self._runtime)
            self._loggers[name] = logger
        return logger

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through a taglog logger named after the record.

        Args:
            record: The log record to emit.
        """
        if record.name == _INTERNAL_PREFIX or record.name.startswith(_INTERNAL_PREFIX + "."):
            return
        try:
            payload: dict[str, str | int | float | bool] = {
                key: value
                for key, value in record.__dict__.items()
                if key not in _STANDARD_LOGRECORD_ATTRS
                and isinstance(value, (str, int, float, bool))
            }
            exception = None
            if record.exc_info and record.exc_info[1] is not None:
                exception = record.exc_info[1]
            self._logger_for(record.name).log(
                from_external(record.levelno),
                record.getMessage(),
                payload or None,
                exception=exception,
            )
        except Exception:
            self.handleError(record)
