"""BDD step definitions for logger tree features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from chlog.adapters.storage.in_memory import InMemoryLogWriter
from chlog.core.errors import LoggerPanic, WriteError
from chlog.core.fields import stringify_fields
from chlog.core.levels import Level
from chlog.logger import Logger


@dataclass
class LoggerScenarioContext:
    """State shared between the steps of one scenario."""

    writer: InMemoryLogWriter | None = None
    logger: Logger | None = None
    failures: list[WriteError] = field(default_factory=list)
    raised: BaseException | None = None


def _parse_fields(text: str) -> dict[str, str]:
    """Parse "a=1,b=2" into a dict."""
    return dict(pair.split("=", 1) for pair in text.split(",") if pair)


@pytest.fixture
def ctx() -> LoggerScenarioContext:
    """Fresh scenario context for each test."""
    return LoggerScenarioContext()


# === Background Steps ===
@given(parsers.parse('an in-memory writer for resource "{resource_id}"'))
def given_writer(ctx: LoggerScenarioContext, resource_id: str) -> None:
    ctx.writer = InMemoryLogWriter(resource_id=resource_id)


@given("a root logger")
def given_root_logger(ctx: LoggerScenarioContext) -> None:
    assert ctx.writer is not None
    ctx.logger = Logger(ctx.writer, on_error=ctx.failures.append)


# === Setup Steps ===
@given(parsers.parse('the logger has fields "{fields}"'))
def given_logger_fields(ctx: LoggerScenarioContext, fields: str) -> None:
    assert ctx.logger is not None
    ctx.logger = ctx.logger.with_fields(_parse_fields(fields))


@given("the writer fails every write")
def given_failing_writer(ctx: LoggerScenarioContext) -> None:
    assert ctx.writer is not None
    ctx.writer.fail_with = ConnectionResetError("connection reset")


# === Action Steps ===
@when(parsers.parse('the logger gets fields "{fields}"'))
def when_with_fields(ctx: LoggerScenarioContext, fields: str) -> None:
    assert ctx.logger is not None
    ctx.logger = ctx.logger.with_fields(_parse_fields(fields))


@when(parsers.parse('the logger gets additional fields "{fields}"'))
def when_with_additional_fields(ctx: LoggerScenarioContext, fields: str) -> None:
    assert ctx.logger is not None
    ctx.logger = ctx.logger.with_additional_fields(_parse_fields(fields))


@when("the logger is detached")
def when_detached(ctx: LoggerScenarioContext) -> None:
    assert ctx.logger is not None
    ctx.logger = ctx.logger.logger()


@when(parsers.parse('the logger logs "{message}" at {level} level'))
def when_logs(ctx: LoggerScenarioContext, message: str, level: str) -> None:
    assert ctx.logger is not None
    try:
        ctx.logger.log(Level[level.upper()], message)
    except (LoggerPanic, SystemExit) as exc:
        ctx.raised = exc


# === Outcome Steps ===
@then(parsers.parse("{count:d} row is written"))
@then(parsers.parse("{count:d} rows are written"))
def then_row_count(ctx: LoggerScenarioContext, count: int) -> None:
    assert ctx.writer is not None
    assert len(ctx.writer.events) == count


@then(parsers.parse('the last row has fields "{fields}"'))
def then_last_row_fields(ctx: LoggerScenarioContext, fields: str) -> None:
    assert ctx.writer is not None
    assert ctx.writer.events[-1].fields == stringify_fields(_parse_fields(fields))


@then("the last row has no fields")
def then_last_row_no_fields(ctx: LoggerScenarioContext) -> None:
    assert ctx.writer is not None
    assert ctx.writer.events[-1].fields == ""


@then(parsers.parse('the last row has resource "{resource_id}"'))
def then_last_row_resource(ctx: LoggerScenarioContext, resource_id: str) -> None:
    assert ctx.writer is not None
    assert ctx.writer.events[-1].resource_id == resource_id


@then(parsers.parse("{count:d} write failure is reported"))
def then_failures_reported(ctx: LoggerScenarioContext, count: int) -> None:
    assert len(ctx.failures) == count


@then(parsers.parse('a panic carrying "{message}" is raised'))
def then_panic_raised(ctx: LoggerScenarioContext, message: str) -> None:
    assert isinstance(ctx.raised, LoggerPanic)
    assert ctx.raised.message == message


@then(parsers.parse("the process exits with status {code:d}"))
def then_process_exits(ctx: LoggerScenarioContext, code: int) -> None:
    assert isinstance(ctx.raised, SystemExit)
    assert ctx.raised.code == code
