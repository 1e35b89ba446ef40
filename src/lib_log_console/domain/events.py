"""Domain event describing a structured log message.

Purpose
-------
Provide an immutable representation of the log events handed to the console
sink. The sink only ever reads these objects.

Contents
--------
* :class:`LogEvent` dataclass with helper methods.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer so the resolver, renderer, and adapters manipulate
pure data objects and keep serialisation logic centralised.
"""

from __future__ import annotations

import json
import traceback
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware; its offset is kept as given."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event transported to the console sink.

    Attributes
    ----------
    timestamp:
        Timezone-aware time of the event. The caller's UTC offset is kept,
        so templates render the wall time the caller supplied.
    level:
        :class:`LogLevel` severity associated with the event.
    message_template:
        Message text with optional ``{Name}`` property placeholders.
    properties:
        Shallow copy of the structured key/value pairs.
    exception:
        Optional exception object or pre-rendered exception text.
    """

    timestamp: datetime
    level: LogLevel
    message_template: str
    properties: dict[str, Any] = field(default_factory=dict)
    exception: BaseException | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if not isinstance(self.level, LogLevel):
            raise TypeError("level must be a LogLevel")
        object.__setattr__(self, "properties", dict(self.properties))

    def exception_text(self) -> str | None:
        """Return the exception rendered as text, traceback included."""

        if self.exception is None:
            return None
        if isinstance(self.exception, BaseException):
            exc = self.exception
            return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return str(self.exception)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to a dictionary with ISO8601 timestamps."""

        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.title,
            "message_template": self.message_template,
            "properties": dict(self.properties),
        }
        exception = self.exception_text()
        if exception is not None:
            data["exception"] = exception
        return data

    def to_json(self) -> str:
        """Serialize the event to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
