"""Logging configuration.

Provides a single entry point for wiring a console appender and the default
level. Configuration can be read from environment variables:

- TAGLOG_LEVEL: trace | debug | info | warn | error | fatal (default: info)
- TAGLOG_FORMAT: text | json (default: text)
- TAGLOG_STREAM: stderr | stdout (default: stderr)

Usage:
    from taglog.config import LoggingConfig, configure

    # Configure once at application startup
    configure(LoggingConfig.from_env())
"""

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

from taglog.adapters.appenders.stream import StreamAppender
from taglog.core.encoding.ndjson import encode_entry
from taglog.core.formatting import format_entry
from taglog.core.levels import Level, parse_level
from taglog.core.registry import Registration
from taglog.core.runtime import Runtime, default_runtime

_FORMATS = ("text", "json")
_STREAMS = ("stderr", "stdout")


@dataclass(frozen=True)
class LoggingConfig:
    """Settings applied by ``configure``.

    Attributes:
        level: Default level for loggers without their own level.
        format: Line format, ``"text"`` or ``"json"``.
        stream: Console stream, ``"stderr"`` or ``"stdout"``.
    """

    level: Level = Level.INFO
    format: Literal["text", "json"] = "text"
    stream: Literal["stderr", "stdout"] = "stderr"

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", parse_level(self.level))
        if self.format not in _FORMATS:
            raise ValueError(f"format must be one of {_FORMATS}, got {self.format!r}")
        if self.stream not in _STREAMS:
            raise ValueError(f"stream must be one of {_STREAMS}, got {self.stream!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoggingConfig":
        """Build a config from TAGLOG_* environment variables.

        Raises:
            InvalidLevel: If TAGLOG_LEVEL is not a level name.
            ValueError: If TAGLOG_FORMAT or TAGLOG_STREAM is unsupported.
        """
        env = os.environ if environ is None else environ
        return cls(
            level=parse_level(env.get("TAGLOG_LEVEL", "info")),
            format=env.get("TAGLOG_FORMAT", "text").lower(),  # type: ignore[arg-type]
            stream=env.get("TAGLOG_STREAM", "stderr").lower(),  # type: ignore[arg-type]
        )


def configure(
    config: LoggingConfig | None = None, runtime: Runtime | None = None
) -> Registration:
    """Apply a config: set the default level and register a console appender.

    Args:
        config: Settings to apply (default: read from the environment).
        runtime: Runtime to configure (default: the process runtime).

    Returns:
        Registration of the console appender.
    """
    config = config or LoggingConfig.from_env()
    runtime = runtime or default_runtime()
    runtime.default_level = config.level
    stream = sys.stdout if config.stream == "stdout" else sys.stderr
    formatter = encode_entry if config.format == "json" else format_entry
    return runtime.registry.add(StreamAppender(stream), formatter=formatter)
