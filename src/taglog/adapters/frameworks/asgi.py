"""ASGI middleware that tags and benchmarks every HTTP request.

Framework-agnostic: works with any ASGI server (uvicorn, hypercorn, daphne)
and any ASGI application without extra dependencies.
"""

import fnmatch
import uuid
from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

from taglog.core.benchmark import Benchmark
from taglog.core.context import with_tags
from taglog.core.levels import Level
from taglog.core.logger import Logger

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]


def _extract_request_id(scope: Scope, header_name: str = "X-Request-ID") -> str:
    """Return the request id sent by the client, or a fresh UUID4.

    Header names are compared case-insensitively, as ASGI servers may pass
    them in any case.
    """
    wanted = header_name.lower().encode("latin-1")
    for key, value in scope.get("headers") or ():
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return str(uuid.uuid4())


def _get_log_level_for_status(status_code: int) -> Level:
    """Level for a request entry: warn on 4xx, error on 5xx, else info."""
    if status_code >= 500:
        return Level.ERROR
    if status_code >= 400:
        return Level.WARN
    return Level.INFO


class TaggingMiddleware:
    """ASGI middleware that wraps each request in a request-id tag.

    Everything logged while the wrapped app handles a request carries the
    request id as a tag. The request itself is benchmarked and logged as
    ``"<METHOD> <path>"`` with method, path and status in the payload, at a
    level derived from the response status.

    Example:
        ```python
        app = TaggingMiddleware(app, logger=Logger("http"), exclude_paths=["/health"])
        ```
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: Logger | None = None,
        request_id_header: str = "X-Request-ID",
        exclude_paths: "list[str] | tuple[str, ...] | None" = None,
        metric: str | None = "http.request",
        min_duration: float = 0.0,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: Wrapped ASGI application.
            logger: Logger for request entries (default: named after this class).
            request_id_header: Header carrying the client's request id.
            exclude_paths: Paths passed straight through, untagged. Entries
                may be ``fnmatch`` patterns such as ``"/internal/*"``.
            metric: Metric identifier for request durations; None disables it.
            min_duration: Successful requests faster than this (ms) are not logged.
        """
        self.app = app
        self.logger = logger or Logger(type(self))
        self.request_id_header = request_id_header
        self.exclude_paths = tuple(exclude_paths or ())
        self.metric = metric
        self.min_duration = min_duration

    def _skip(self, scope: Scope) -> bool:
        if scope["type"] != "http":
            return True
        path = scope["path"]
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self._skip(scope):
            await self.app(scope, receive, send)
            return

        method, path = scope["method"], scope["path"]
        bench = Benchmark(
            self.logger,
            Level.INFO,
            f"{method} {path}",
            payload={"method": method, "path": path},
            min_duration=self.min_duration,
            metric=self.metric,
        )

        async def send_and_record_status(message: Message) -> None:
            if message["type"] == "http.response.start":
                status = message["status"]
                bench.payload["status"] = status
                bench.level = _get_log_level_for_status(status)
            await send(message)

        with with_tags(_extract_request_id(scope, self.request_id_header)), bench:
            try:
                await self.app(scope, receive, send_and_record_status)
            except Exception:
                bench.payload["status"] = 500
                bench.level = Level.ERROR
                raise
