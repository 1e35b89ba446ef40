"""Rendering helpers shared by the template formatters.

Why
---
Output templates and message templates render the same kinds of values
(timestamps, levels, property values). Keeping the rules in one place keeps
``{Message}``, ``{Properties}`` and ad-hoc property tokens consistent.

Contents
--------
* :func:`format_timestamp` - .NET-style custom date/time patterns.
* :func:`format_level` - ``u3``/``w3``/``t3`` style level rendering.
* :func:`render_value` - scalar and structured property values.
* :func:`parse_message_template` / :func:`render_message` - message templates.
* :func:`render_properties` - the ``{Properties}`` token.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Set as AbstractSet
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from string import Formatter
from typing import Any, Iterable

from lib_log_console.application.ports.formatter import FormatProvider
from lib_log_console.domain.errors import RenderError
from lib_log_console.domain.events import LogEvent
from lib_log_console.domain.levels import LogLevel


PROPERTY_NAME = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*|\d+)$")
LEVEL_FORMAT = re.compile(r"^([uwt])(\d*)$")
RENDER_FLAGS = frozenset("lj")

_TIMESTAMP_TOKEN = re.compile(
    r"'[^']*'|\"[^\"]*\"|\\.|yyyy|yy|MMMM|MMM|MM|M|dddd|ddd|dd|d|HH|H|hh|h|mm|m|ss|s|f{1,7}|tt|zzz|zz|z|K"
)

_STANDARD_TIMESTAMP_FORMATS = {
    "s": "%Y-%m-%dT%H:%M:%S",
    "u": "%Y-%m-%d %H:%M:%SZ",
}


def _offset(ts: datetime, *, minutes: bool = True, pad: bool = True) -> str:
    delta = ts.utcoffset() or timedelta(0)
    total = int(delta.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, mins = divmod(abs(total), 60)
    text = f"{sign}{hours:02d}" if pad else f"{sign}{hours}"
    return f"{text}:{mins:02d}" if minutes else text


def _timestamp_part(ts: datetime, token: str) -> str:
    if token[0] in "'\"":
        return token[1:-1]
    if token[0] == "\\":
        return token[1]
    if token[0] == "f":
        return f"{ts.microsecond:06d}0"[: len(token)]
    if token == "yyyy":
        return f"{ts.year:04d}"
    if token == "yy":
        return f"{ts.year % 100:02d}"
    if token == "MMMM":
        return ts.strftime("%B")
    if token == "MMM":
        return ts.strftime("%b")
    if token == "MM":
        return f"{ts.month:02d}"
    if token == "M":
        return str(ts.month)
    if token == "dddd":
        return ts.strftime("%A")
    if token == "ddd":
        return ts.strftime("%a")
    if token == "dd":
        return f"{ts.day:02d}"
    if token == "d":
        return str(ts.day)
    if token in ("HH", "H"):
        return f"{ts.hour:02d}" if token == "HH" else str(ts.hour)
    if token in ("hh", "h"):
        hour = ts.hour % 12 or 12
        return f"{hour:02d}" if token == "hh" else str(hour)
    if token in ("mm", "m"):
        return f"{ts.minute:02d}" if token == "mm" else str(ts.minute)
    if token in ("ss", "s"):
        return f"{ts.second:02d}" if token == "ss" else str(ts.second)
    if token == "tt":
        return "AM" if ts.hour < 12 else "PM"
    if token in ("zzz", "K"):
        return _offset(ts)
    if token == "zz":
        return _offset(ts, minutes=False)
    return _offset(ts, minutes=False, pad=False)


def format_timestamp(ts: datetime, fmt: str | None) -> str:
    """Render ``ts`` with a .NET-style custom or standard format string.

    Examples
    --------
    >>> from datetime import timezone
    >>> ts = datetime(2025, 9, 23, 4, 5, 6, 789000, tzinfo=timezone.utc)
    >>> format_timestamp(ts, "yyyy-MM-dd HH:mm:ss.fff")
    '2025-09-23 04:05:06.789'
    >>> format_timestamp(ts, "HH:mm zzz")
    '04:05 +00:00'
    """
    if not fmt:
        return ts.isoformat()
    if fmt in ("o", "O"):
        return ts.isoformat(timespec="microseconds")
    standard = _STANDARD_TIMESTAMP_FORMATS.get(fmt)
    if standard is not None:
        return ts.strftime(standard)
    return _TIMESTAMP_TOKEN.sub(lambda match: _timestamp_part(ts, match.group(0)), fmt)


def format_level(level: LogLevel, fmt: str | None) -> str:
    """Render ``level`` honouring ``u``/``w``/``t`` case and width formats.

    Examples
    --------
    >>> format_level(LogLevel.INFORMATION, "u3")
    'INF'
    >>> format_level(LogLevel.WARNING, "w3")
    'wrn'
    >>> format_level(LogLevel.ERROR, "t")
    'Error'
    >>> format_level(LogLevel.FATAL, None)
    'Fatal'
    """
    if not fmt:
        return level.title
    match = LEVEL_FORMAT.match(fmt)
    if match is None:
        raise RenderError(f"Invalid level format: {fmt!r}")
    case, width_text = match.groups()
    if not width_text:
        text = level.title
    else:
        width = int(width_text)
        text = level.code[:width] if width <= 3 else level.title[:width]
    if case == "u":
        return text.upper()
    if case == "w":
        return text.lower()
    return text.title()


def _json(value: Any) -> str:
    return json.dumps(value, default=str, ensure_ascii=False, sort_keys=isinstance(value, Mapping))


def render_value(
    value: Any,
    *,
    literal: bool = False,
    as_json: bool = False,
    format_spec: str | None = None,
    provider: FormatProvider | None = None,
) -> str:
    """Render a property value the way message templates display it.

    Strings are quoted unless ``literal``; ``as_json`` switches structures to
    JSON. Any other ``format_spec`` is a Python format specification.

    Examples
    --------
    >>> render_value("Godot")
    '"Godot"'
    >>> render_value("Godot", literal=True)
    'Godot'
    >>> render_value([1, "a"])
    '[1, "a"]'
    >>> render_value({"b": 2}, as_json=True)
    '{"b": 2}'
    >>> render_value(3.14159, format_spec=".2f")
    '3.14'
    """
    if provider is not None:
        provided = provider.format_value(value, format_spec)
        if provided is not None:
            return provided
    if format_spec:
        try:
            return format(value, format_spec)
        except (TypeError, ValueError) as exc:
            raise RenderError(f"Cannot format {type(value).__name__} value with {format_spec!r}: {exc}") from exc
    if value is None:
        return "null"
    if isinstance(value, str):
        return value if literal else '"' + value.replace('"', '\\"') + '"'
    if isinstance(value, (bytes, bytearray)):
        return value.hex()
    if isinstance(value, Mapping):
        if as_json:
            return _json(dict(value))
        pairs = (f"{key}={render_value(item, literal=literal, provider=provider)}" for key, item in value.items())
        return "{" + ", ".join(pairs) + "}"
    if isinstance(value, (list, tuple, AbstractSet)):
        items = sorted(value, key=repr) if isinstance(value, AbstractSet) else list(value)
        if as_json:
            return _json(items)
        return "[" + ", ".join(render_value(item, literal=literal, provider=provider) for item in items) + "]"
    if isinstance(value, datetime):
        return format_timestamp(value, None)
    return str(value)


@dataclass(frozen=True, slots=True)
class MessageToken:
    """Literal text or a property hole inside a message template."""

    text: str
    name: str | None = None
    format_spec: str | None = None
    alignment: int | None = None


def _raw_token(field: str, format_spec: str, conversion: str | None) -> str:
    text = "{" + field
    if conversion:
        text += "!" + conversion
    if format_spec:
        text += ":" + format_spec
    return text + "}"


@lru_cache(maxsize=1024)
def parse_message_template(template: str) -> tuple[MessageToken, ...]:
    """Tokenise a message template; malformed templates become one literal.

    Examples
    --------
    >>> [t.name for t in parse_message_template("Hello, {Name}!")]
    [None, 'Name', None]
    >>> parse_message_template("broken {")[0].text
    'broken {'
    """
    try:
        parsed = list(Formatter().parse(template))
    except ValueError:
        return (MessageToken(template),)

    tokens: list[MessageToken] = []
    for literal, field, format_spec, conversion in parsed:
        if literal:
            tokens.append(MessageToken(literal))
        if field is None:
            continue
        raw = _raw_token(field, format_spec, conversion)
        name, _, alignment_text = field.partition(",")
        name = name.strip().lstrip("@$")
        alignment: int | None = None
        if alignment_text:
            try:
                alignment = int(alignment_text.strip())
            except ValueError:
                tokens.append(MessageToken(raw))
                continue
        if conversion or not PROPERTY_NAME.match(name):
            tokens.append(MessageToken(raw))
            continue
        tokens.append(MessageToken(raw, name=name, format_spec=format_spec or None, alignment=alignment))
    return tuple(tokens)


def message_property_names(template: str) -> frozenset[str]:
    """Return the property names referenced by ``template``."""
    return frozenset(token.name for token in parse_message_template(template) if token.name is not None)


def align(text: str, alignment: int | None) -> str:
    """Pad ``text`` to ``alignment``; negative values left-align."""
    if alignment is None:
        return text
    if alignment < 0:
        return text.ljust(-alignment)
    return text.rjust(alignment)


def _split_flags(format_spec: str | None) -> tuple[bool, bool, str | None]:
    if format_spec and set(format_spec) <= RENDER_FLAGS:
        return "l" in format_spec, "j" in format_spec, None
    return False, False, format_spec


def render_property(
    value: Any,
    format_spec: str | None,
    *,
    literal: bool = False,
    as_json: bool = False,
    provider: FormatProvider | None = None,
) -> str:
    """Render one property hole, treating ``l``/``j`` specs as flags."""
    flag_literal, flag_json, python_spec = _split_flags(format_spec)
    return render_value(
        value,
        literal=literal or flag_literal,
        as_json=as_json or flag_json,
        format_spec=python_spec,
        provider=provider,
    )


def render_message(
    event: LogEvent,
    *,
    literal: bool = False,
    as_json: bool = False,
    provider: FormatProvider | None = None,
) -> str:
    """Substitute ``event.properties`` into its message template.

    Missing properties leave the original token text in place.

    Examples
    --------
    >>> from datetime import timezone
    >>> event = LogEvent(datetime(2025, 1, 1, tzinfo=timezone.utc), LogLevel.INFORMATION,
    ...                  "Hello, {Name}! {Missing}", {"Name": "Godot"})
    >>> render_message(event)
    'Hello, "Godot"! {Missing}'
    >>> render_message(event, literal=True)
    'Hello, Godot! {Missing}'
    """
    parts: list[str] = []
    for token in parse_message_template(event.message_template):
        if token.name is None or token.name not in event.properties:
            parts.append(token.text)
            continue
        rendered = render_property(
            event.properties[token.name],
            token.format_spec,
            literal=literal,
            as_json=as_json,
            provider=provider,
        )
        parts.append(align(rendered, token.alignment))
    return "".join(parts)


def render_properties(
    properties: Mapping[str, Any],
    exclude: Iterable[str] = (),
    *,
    as_json: bool = False,
    provider: FormatProvider | None = None,
) -> str:
    """Render the properties not listed in ``exclude`` for ``{Properties}``.

    Examples
    --------
    >>> render_properties({"b": 1, "a": "x"})
    '{a="x", b=1}'
    >>> render_properties({"a": 1}, exclude={"a"})
    '{}'
    """
    excluded = set(exclude)
    remaining = {key: properties[key] for key in sorted(properties) if key not in excluded}
    if as_json:
        return _json(remaining)
    pairs = (f"{key}={render_value(value, provider=provider)}" for key, value in remaining.items())
    return "{" + ", ".join(pairs) + "}"


__all__ = [
    "LEVEL_FORMAT",
    "MessageToken",
    "PROPERTY_NAME",
    "RENDER_FLAGS",
    "align",
    "format_level",
    "format_timestamp",
    "message_property_names",
    "parse_message_template",
    "render_message",
    "render_properties",
    "render_property",
    "render_value",
]
