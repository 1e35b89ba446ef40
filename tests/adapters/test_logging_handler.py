from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

import pytest

from lib_log_console.adapters.logging_handler import SOURCE_CONTEXT, ConsoleSinkHandler, record_to_event
from lib_log_console.domain.levels import LogLevel
from lib_log_console.sink import console_sink


@pytest.fixture
def bridged_logger(collector) -> Iterator[logging.Logger]:
    sink = console_sink("[{Level:u3}] {Message:lj}{NewLine}{Exception}", writer=collector)
    handler = ConsoleSinkHandler(sink)
    logger = logging.getLogger("tests.console.bridge")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_percent_style_records_render_literally(bridged_logger, collector) -> None:
    bridged_logger.info("user %s has {braces}", "ada")
    assert collector.lines == ["[INF] user ada has {braces}"]


def test_brace_style_records_fill_from_extra(bridged_logger, collector) -> None:
    bridged_logger.warning("Hello, {Name}!", extra={"Name": "Godot"})
    assert collector.lines == ["[WRN] Hello, Godot!"]


def test_exception_records_emit_traceback_lines(bridged_logger, collector) -> None:
    try:
        raise ValueError("bad input")
    except ValueError:
        bridged_logger.exception("job failed")
    assert collector.lines[0] == "[ERR] job failed"
    assert collector.lines[1] == "Traceback (most recent call last):"
    assert collector.lines[-1] == "ValueError: bad input"
    assert all("\n" not in line for line in collector.lines)


def test_handler_level_filters_records(collector) -> None:
    handler = ConsoleSinkHandler(console_sink("{Message}", writer=collector), level=logging.WARNING)
    logger = logging.getLogger("tests.console.filtered")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    try:
        logger.info("quiet")
        logger.error("loud")
    finally:
        logger.removeHandler(handler)
    assert collector.lines == ["loud"]


def test_render_failures_go_through_handle_error(collector, monkeypatch: pytest.MonkeyPatch) -> None:
    handler = ConsoleSinkHandler(console_sink("{Count:d}", writer=collector))
    seen: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", seen.append)
    record = logging.LogRecord("tests", logging.INFO, __file__, 1, "m", (), None)
    record.Count = "not a number"
    handler.emit(record)
    assert seen == [record]
    assert collector.lines == []


def test_record_to_event_maps_level_source_and_extras() -> None:
    record = logging.LogRecord("app.db", 25, __file__, 10, "Query {Sql}", (), None)
    record.Sql = "select 1"
    event = record_to_event(record)
    assert event.level is LogLevel.INFORMATION
    assert event.message_template == "Query {Sql}"
    assert event.properties == {SOURCE_CONTEXT: "app.db", "Sql": "select 1"}
    assert event.timestamp.timestamp() == pytest.approx(record.created)


def test_record_to_event_prefers_exc_text_then_stack_info() -> None:
    record = logging.LogRecord("app", logging.ERROR, __file__, 1, "m", (), None)
    record.exc_text = "cached traceback"
    assert record_to_event(record).exception == "cached traceback"

    record = logging.LogRecord("app", logging.ERROR, __file__, 1, "m", (), None, sinfo="Stack (most recent call last):")
    assert record_to_event(record).exception == "Stack (most recent call last):"


def test_record_to_event_uses_local_wall_time() -> None:
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "m", (), None)
    event = record_to_event(record)
    expected = datetime.fromtimestamp(record.created).astimezone()
    assert event.timestamp.utcoffset() == expected.utcoffset()
    assert event.timestamp.replace(tzinfo=None) == expected.replace(tzinfo=None)
