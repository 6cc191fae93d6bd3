"""Shared test fixtures for all test modules."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from taglog.adapters.appenders.in_memory import InMemoryAppender
from taglog.core.levels import Level
from taglog.core.logger import Logger
from taglog.core.models import MetricEvent
from taglog.core.registry import Registration
from taglog.core.runtime import Runtime

try:
    import httpx
except ImportError:
    httpx = None


class LoggerTest:
    """Stand-in class whose name becomes the logger name in rendered lines."""


@pytest.fixture
def runtime() -> Runtime:
    """Fresh runtime with an empty registry and trace as default level."""
    return Runtime(default_level=Level.TRACE)


@pytest.fixture
def appender() -> InMemoryAppender:
    """In-memory appender that keeps every rendered line."""
    return InMemoryAppender()


@pytest.fixture
def registration(runtime: Runtime, appender: InMemoryAppender) -> Registration:
    """The in-memory appender registered with the test runtime."""
    return runtime.registry.add(appender)


@pytest.fixture
def logger(runtime: Runtime, registration: Registration) -> Logger:
    """Logger named LoggerTest bound to the test runtime."""
    return Logger(LoggerTest, runtime=runtime)


@pytest.fixture
def metrics(runtime: Runtime) -> list[MetricEvent]:
    """Collects metric events delivered to the runtime's subscriber."""
    events: list[MetricEvent] = []
    runtime.on_metric(events.append)
    return events


@pytest.fixture
def payload() -> dict[str, object]:
    return {"session_id": "HSSKLEU@JDK767", "tracking_number": 12345}


@pytest.fixture
def log_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for SQLite appender tests."""
    return str(tmp_path / "logs.db")


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/endpoint")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client


@pytest.fixture
def clean_default_runtime() -> Iterator[None]:
    """Restore the process runtime after tests that touch it."""
    from taglog.core.runtime import default_runtime

    rt = default_runtime()
    saved_level = rt.default_level
    saved_registrations = rt.registry.list()
    saved_subscriber = rt.metrics.subscriber
    rt.registry.clear()
    yield
    rt.registry.clear()
    for reg in saved_registrations:
        rt.registry.add(reg.appender, filter=reg.filter, formatter=reg.formatter)
    rt.default_level = saved_level
    rt.on_metric(saved_subscriber)
