"""Prebuilt formatter rendering each event as one JSON object.

Useful as the ``formatter=`` option of :func:`lib_log_console.console_sink`
when machine-readable console output is wanted; it bypasses template
resolution entirely. Exception tracebacks stay inside the JSON string, so a
rendered event is always exactly one line.
"""

from __future__ import annotations

import json
from typing import Any

from lib_log_console.application.ports.formatter import TextFormatterPort
from lib_log_console.domain.events import LogEvent

from ._formatting import render_message


class JsonLinesFormatter(TextFormatterPort):
    """Render events as compact, key-sorted JSON.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_console.domain.levels import LogLevel
    >>> event = LogEvent(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.WARNING, "Disk {Pct}%", {"Pct": 91})
    >>> JsonLinesFormatter().format(event)
    '{"@l": "Warning", "@m": "Disk 91%", "@mt": "Disk {Pct}%", "@t": "2025-09-30T00:00:00+00:00", "Pct": 91}'
    """

    def __init__(self, *, include_message_template: bool = True) -> None:
        self._include_message_template = include_message_template

    def format(self, event: LogEvent) -> str:
        payload: dict[str, Any] = {
            "@t": event.timestamp.isoformat(),
            "@l": event.level.title,
            "@m": render_message(event, literal=True),
        }
        if self._include_message_template:
            payload["@mt"] = event.message_template
        exception = event.exception_text()
        if exception is not None:
            payload["@x"] = exception
        for key, value in event.properties.items():
            payload.setdefault(key, value)
        return json.dumps(payload, sort_keys=True, default=str, ensure_ascii=False)


__all__ = ["JsonLinesFormatter"]
