"""Step definitions for logger.feature."""

import re
from collections.abc import Iterator
from contextlib import ExitStack
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from taglog.adapters.appenders.in_memory import InMemoryAppender
from taglog.core.context import with_payload, with_tags
from taglog.core.filters import pattern_filter
from taglog.core.logger import Logger
from taglog.core.models import MetricEvent
from taglog.core.registry import Registration
from taglog.core.runtime import Runtime


@dataclass
class LoggerScenarioContext:
    """State shared between the steps of one scenario."""

    runtime: Runtime = field(default_factory=Runtime)
    appender: InMemoryAppender = field(default_factory=InMemoryAppender)
    registration: Registration | None = None
    logger: Logger | None = None
    scopes: ExitStack = field(default_factory=ExitStack)
    metrics: list[MetricEvent] = field(default_factory=list)
    raised: BaseException | None = None

    @property
    def last_line(self) -> str:
        assert self.appender.message is not None, "nothing was logged"
        return self.appender.message


@pytest.fixture
def ctx() -> Iterator[LoggerScenarioContext]:
    """Fresh scenario context; open tag and payload scopes are closed afterwards."""
    context = LoggerScenarioContext()
    with context.scopes:
        yield context


# === Background ===
@given("an in-memory appender")
def step_appender(ctx: LoggerScenarioContext) -> None:
    ctx.registration = ctx.runtime.registry.add(ctx.appender)


@given(parsers.parse('a logger named "{name}" at level "{level:w}"'))
def step_logger(ctx: LoggerScenarioContext, name: str, level: str) -> None:
    ctx.logger = Logger(name, level, runtime=ctx.runtime)


@given(
    parsers.parse(
        'a logger named "{name}" at level "{level:w}" filtered on names matching "{pattern}"'
    )
)
def step_filtered_logger(ctx: LoggerScenarioContext, name: str, level: str, pattern: str) -> None:
    ctx.logger = Logger(name, level, pattern_filter(pattern, field="name"), runtime=ctx.runtime)


@given(parsers.parse('the logger level is "{level:w}"'))
def step_logger_level(ctx: LoggerScenarioContext, level: str) -> None:
    assert ctx.logger is not None
    ctx.logger.level = level


# === Context ===
@given(parsers.parse('the tags "{first}" and "{second}"'))
def step_two_tags(ctx: LoggerScenarioContext, first: str, second: str) -> None:
    ctx.scopes.enter_context(with_tags(first, second))


@given(parsers.parse('the tag "{tag}"'))
def step_tag(ctx: LoggerScenarioContext, tag: str) -> None:
    ctx.scopes.enter_context(with_tags(tag))


@given(parsers.parse('the payload field "{key}" set to "{value}"'))
def step_payload(ctx: LoggerScenarioContext, key: str, value: str) -> None:
    ctx.scopes.enter_context(with_payload({key: value}))


@when("the tagged block ends")
def step_close_scopes(ctx: LoggerScenarioContext) -> None:
    ctx.scopes.close()


# === Filters and metrics ===
@given(parsers.parse('the appender only accepts messages matching "{pattern}"'))
def step_appender_filter(ctx: LoggerScenarioContext, pattern: str) -> None:
    assert ctx.registration is not None
    ctx.registration.filter = pattern


@given("a metric subscriber")
def step_metric_subscriber(ctx: LoggerScenarioContext) -> None:
    ctx.runtime.on_metric(ctx.metrics.append)


# === Actions ===
@when(parsers.parse('the logger logs "{message}" at "{level:w}"'))
def step_log(ctx: LoggerScenarioContext, message: str, level: str) -> None:
    assert ctx.logger is not None
    ctx.logger.log(level, message)


@when(parsers.parse('the logger benchmarks "{message}" at "{level:w}"'))
def step_benchmark(ctx: LoggerScenarioContext, message: str, level: str) -> None:
    assert ctx.logger is not None
    ctx.logger.benchmark(level, message, lambda: "result")


@when(
    parsers.parse(
        'the logger benchmarks "{message}" at "{level:w}" with a minimum of {ms:d} ms'
    )
)
def step_benchmark_min(ctx: LoggerScenarioContext, message: str, level: str, ms: int) -> None:
    assert ctx.logger is not None
    ctx.logger.benchmark(level, message, lambda: "result", min_duration=ms)


@when(parsers.parse('the logger benchmarks "{message}" at "{level:w}" as metric "{metric}"'))
def step_benchmark_metric(
    ctx: LoggerScenarioContext, message: str, level: str, metric: str
) -> None:
    assert ctx.logger is not None
    ctx.logger.benchmark(level, message, lambda: "result", metric=metric)


@when(parsers.parse('the logger benchmarks a failing block at "{level:w}" as metric "{metric}"'))
def step_benchmark_failure(ctx: LoggerScenarioContext, level: str, metric: str) -> None:
    assert ctx.logger is not None

    def block() -> None:
        raise RuntimeError("Test")

    try:
        ctx.logger.benchmark(level, "hello world", block, metric=metric)
    except RuntimeError as exc:
        ctx.raised = exc


# === Outcomes ===
@then(parsers.parse('the last line has level character "{char}"'))
def step_level_char(ctx: LoggerScenarioContext, char: str) -> None:
    assert ctx.last_line.split(" ")[2] == char


@then(parsers.parse('the last line ends with "{text}"'))
def step_line_ends_with(ctx: LoggerScenarioContext, text: str) -> None:
    assert ctx.last_line.endswith(text)


@then(parsers.parse('the last line contains "{text}"'))
def step_line_contains(ctx: LoggerScenarioContext, text: str) -> None:
    assert text in ctx.last_line


@then(parsers.parse('the last line shows a duration before "{text}"'))
def step_line_duration(ctx: LoggerScenarioContext, text: str) -> None:
    assert re.search(r"\(\d+\.\dms\) " + re.escape(text) + "$", ctx.last_line)


@then("the logger has no tags")
def step_no_tags(ctx: LoggerScenarioContext) -> None:
    assert ctx.logger is not None
    assert ctx.logger.tags == []


@then("no line was written")
def step_no_lines(ctx: LoggerScenarioContext) -> None:
    assert ctx.appender.lines == []


@then(parsers.parse("{n:d} line was written"))
def step_line_count(ctx: LoggerScenarioContext, n: int) -> None:
    assert len(ctx.appender.lines) == n


@then(parsers.parse('the subscriber received the metric "{metric}"'))
def step_metric_received(ctx: LoggerScenarioContext, metric: str) -> None:
    assert [event.metric for event in ctx.metrics] == [metric]


@then("the subscriber received no metric")
def step_no_metric(ctx: LoggerScenarioContext) -> None:
    assert ctx.metrics == []


@then(parsers.parse('the error "{message}" was raised'))
def step_error_raised(ctx: LoggerScenarioContext, message: str) -> None:
    assert isinstance(ctx.raised, RuntimeError)
    assert str(ctx.raised) == message
