"""Format providers for culture-sensitive template tokens."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any

from lib_log_console.application.ports.formatter import FormatProvider

from ._formatting import format_timestamp


class TimezoneFormatProvider(FormatProvider):
    """Render timestamps in ``tz`` instead of the event's own offset.

    Non-datetime values return ``None`` so the built-in rendering applies.

    Examples
    --------
    >>> from datetime import timedelta, timezone
    >>> provider = TimezoneFormatProvider(timezone(timedelta(hours=2)))
    >>> provider.format_value(datetime(2025, 1, 1, 22, 30, tzinfo=timezone.utc), "yyyy-MM-dd HH:mm zzz")
    '2025-01-02 00:30 +02:00'
    >>> provider.format_value(42, None) is None
    True
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    def format_value(self, value: Any, format_spec: str | None) -> str | None:
        if not isinstance(value, datetime):
            return None
        return format_timestamp(value.astimezone(self._tz), format_spec)


__all__ = ["TimezoneFormatProvider"]
