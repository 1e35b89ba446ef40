"""Bridge from the stdlib :mod:`logging` pipeline to a console sink.

Purpose
-------
Let applications that log through :mod:`logging` route records into a
:class:`lib_log_console.sink.ConsoleLineSink` without changing call sites.

Contents
--------
* :func:`record_to_event` - convert a :class:`logging.LogRecord`.
* :class:`ConsoleSinkHandler` - :class:`logging.Handler` calling ``sink.emit``.

System Role
-----------
The logging pipeline owns level filtering and error policy: handler levels
decide which records arrive, and failures raised by the sink are routed
through :meth:`logging.Handler.handleError` like any stdlib handler.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from lib_log_console.domain.events import LogEvent
from lib_log_console.domain.levels import LogLevel

_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "taskName"}

SOURCE_CONTEXT = "SourceContext"


def _escape_braces(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Translate ``record`` into a :class:`LogEvent`.

    Records logged with ``%``-style arguments are rendered first and treated
    as literal text; records without arguments keep their message as a
    message template filled from ``extra`` properties.

    Examples
    --------
    >>> record = logging.LogRecord("app.http", logging.INFO, __file__, 1, "Hello, {Name}!", (), None)
    >>> record.Name = "Godot"
    >>> event = record_to_event(record)
    >>> event.message_template, event.properties["Name"], event.properties["SourceContext"]
    ('Hello, {Name}!', 'Godot', 'app.http')
    """
    if record.args:
        message_template = _escape_braces(record.getMessage())
    else:
        message_template = str(record.msg)

    properties: dict[str, Any] = {SOURCE_CONTEXT: record.name}
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            properties[key] = value

    exception: BaseException | str | None = None
    if record.exc_info and record.exc_info[1] is not None:
        exception = record.exc_info[1]
    elif record.exc_text:
        exception = record.exc_text
    elif record.stack_info:
        exception = record.stack_info

    return LogEvent(
        timestamp=datetime.fromtimestamp(record.created).astimezone(),
        level=LogLevel.from_python_level(record.levelno),
        message_template=message_template,
        properties=properties,
        exception=exception,
    )


class ConsoleSinkHandler(logging.Handler):
    """Forward log records to a console sink.

    Examples
    --------
    >>> class Collector:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def write_line(self, text):
    ...         self.lines.append(text)
    >>> from lib_log_console.sink import console_sink
    >>> collector = Collector()
    >>> handler = ConsoleSinkHandler(console_sink("[{Level:u3}] {Message:lj}", writer=collector))
    >>> log = logging.getLogger("doctest.console")
    >>> log.addHandler(handler)
    >>> log.warning("disk at %d%%", 91)
    >>> collector.lines
    ['[WRN] disk at 91%']
    >>> log.removeHandler(handler)
    """

    def __init__(self, sink: Any, level: int | str = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink

    @property
    def sink(self) -> Any:
        """Return the sink receiving converted events."""
        return self._sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sink.emit(record_to_event(record))
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


__all__ = ["ConsoleSinkHandler", "SOURCE_CONTEXT", "record_to_event"]
