"""Output-template formatter implementing :class:`TextFormatterPort`.

Purpose
-------
Parse an output template such as
``"{Timestamp:yyyy-MM-dd HH:mm:ss.fff} [{Level:u3}] {Message:lj}{NewLine}{Exception}"``
once into a token list, then render any number of events against it.

Contents
--------
* :func:`compile_template` - the :class:`TemplateCompiler` used by default.
* :class:`OutputTemplateFormatter` - compiled, reusable formatter.

System Role
-----------
Supplies the "compile a template, format an event" capability the sink
consumes. Parsing relies on :meth:`string.Formatter.parse`, so the brace
syntax matches :meth:`str.format`: ``{{`` and ``}}`` are literal braces and
unbalanced braces are rejected at compile time.

Alignment Notes
---------------
Built-in tokens: ``Timestamp``, ``Level``, ``Message``, ``NewLine``,
``Exception`` and ``Properties``. Every other name renders the matching event
property, or nothing when the event lacks it.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import Formatter

from rich.markup import escape

from lib_log_console.application.ports.formatter import FormatProvider, TextFormatterPort
from lib_log_console.domain.errors import RenderError, TemplateCompileError
from lib_log_console.domain.events import LogEvent

from ._formatting import (
    LEVEL_FORMAT,
    PROPERTY_NAME,
    RENDER_FLAGS,
    align,
    format_level,
    format_timestamp,
    message_property_names,
    render_message,
    render_properties,
    render_property,
)

NEWLINE = "\n"

_BUILTIN_NAMES = frozenset({"Timestamp", "Level", "Message", "NewLine", "Exception", "Properties"})
_TRUSTED_NAMES = frozenset({"Timestamp", "Level", "NewLine"})
# Tokens rendered from fixed vocabularies; never escaped.


@dataclass(frozen=True, slots=True)
class _Token:
    text: str = ""
    name: str | None = None
    format_spec: str | None = None
    alignment: int | None = None


def _fail(template: str, reason: str) -> TemplateCompileError:
    return TemplateCompileError(f"Invalid output template {template!r}: {reason}", template=template)


def _parse_field(template: str, field: str, format_spec: str, conversion: str | None) -> _Token:
    if conversion:
        raise _fail(template, f"conversion '!{conversion}' is not supported")
    name, has_alignment, alignment_text = field.partition(",")
    name = name.strip()
    if not name:
        raise _fail(template, "empty placeholder")
    if not PROPERTY_NAME.match(name):
        raise _fail(template, f"invalid property name {name!r}")
    alignment: int | None = None
    if has_alignment:
        try:
            alignment = int(alignment_text.strip())
        except ValueError:
            raise _fail(template, f"alignment {alignment_text!r} of {name!r} is not an integer") from None
    if "{" in format_spec or "}" in format_spec:
        raise _fail(template, f"nested braces in the format of {name!r}")
    if name == "Level" and format_spec and not LEVEL_FORMAT.match(format_spec):
        raise _fail(template, f"level format {format_spec!r} must look like u3, w3, t3, u, w or t")
    if name in ("Message", "Properties") and format_spec and not set(format_spec) <= RENDER_FLAGS:
        raise _fail(template, f"{name} format {format_spec!r} may only combine 'l' and 'j'")
    return _Token(name=name, format_spec=format_spec or None, alignment=alignment)


def _tokenise(template: str) -> tuple[_Token, ...]:
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as exc:
        raise _fail(template, str(exc)) from exc
    tokens: list[_Token] = []
    for literal, field, format_spec, conversion in parsed:
        if literal:
            tokens.append(_Token(text=literal))
        if field is not None:
            tokens.append(_parse_field(template, field, format_spec, conversion))
    return tuple(tokens)


class OutputTemplateFormatter(TextFormatterPort):
    """Render events against a pre-parsed output template.

    With ``escape_values`` the text produced from event data (``Message``,
    ``Exception``, ``Properties`` and property tokens) is passed through
    :func:`rich.markup.escape`, so only the template's own literal markup is
    interpreted by the console.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_console.domain.levels import LogLevel
    >>> event = LogEvent(datetime(2025, 9, 30, 12, 0, 1, 250000, tzinfo=timezone.utc), LogLevel.INFORMATION, "Hello, {Who}!", {"Who": "Godot"})
    >>> compile_template("{Timestamp:HH:mm:ss.fff} [{Level:u3}] {Message:lj}").format(event)
    '12:00:01.250 [INF] Hello, Godot!'
    >>> compile_template("[bold]{Message:l}[/bold]", escape_values=True).format(event.replace(message_template="[a, b]"))
    '[bold]\\\\[a, b][/bold]'
    """

    def __init__(
        self,
        template: str,
        tokens: tuple[_Token, ...],
        format_provider: FormatProvider | None = None,
        *,
        escape_values: bool = False,
    ) -> None:
        self._template = template
        self._tokens = tokens
        self._format_provider = format_provider
        self._escape_values = escape_values
        self._template_properties = frozenset(
            token.name for token in tokens if token.name is not None and token.name not in _BUILTIN_NAMES
        )

    @property
    def template(self) -> str:
        """Return the source template string."""
        return self._template

    @property
    def format_provider(self) -> FormatProvider | None:
        """Return the provider consulted for timestamps and property values."""
        return self._format_provider

    @property
    def escape_values(self) -> bool:
        """Return whether event-derived text is escaped for Rich markup."""
        return self._escape_values

    def format(self, event: LogEvent) -> str:
        """Render ``event``; failures surface as :class:`RenderError`."""
        try:
            return "".join(self._render(token, event) for token in self._tokens)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to render event with template {self._template!r}: {exc}") from exc

    def _render(self, token: _Token, event: LogEvent) -> str:
        name = token.name
        if name is None:
            return token.text
        text = align(self._render_field(name, token.format_spec, event), token.alignment)
        if self._escape_values and name not in _TRUSTED_NAMES:
            return escape(text)
        return text

    def _render_field(self, name: str, spec: str | None, event: LogEvent) -> str:
        provider = self._format_provider
        if name == "Timestamp":
            if provider is not None:
                provided = provider.format_value(event.timestamp, spec)
                if provided is not None:
                    return provided
            return format_timestamp(event.timestamp, spec)
        if name == "Level":
            return format_level(event.level, spec)
        if name == "Message":
            spec = spec or ""
            return render_message(event, literal="l" in spec, as_json="j" in spec, provider=provider)
        if name == "NewLine":
            return NEWLINE
        if name == "Exception":
            text = event.exception_text()
            if not text:
                return ""
            return text if text.endswith(("\n", "\r")) else text + NEWLINE
        if name == "Properties":
            exclude = message_property_names(event.message_template) | self._template_properties
            return render_properties(event.properties, exclude, as_json="j" in (spec or ""), provider=provider)
        if name not in event.properties:
            return ""
        return render_property(event.properties[name], spec, provider=provider)

    def __repr__(self) -> str:
        return f"OutputTemplateFormatter({self._template!r})"


def compile_template(
    template: str,
    format_provider: FormatProvider | None = None,
    *,
    escape_values: bool = False,
) -> OutputTemplateFormatter:
    """Parse ``template`` into an :class:`OutputTemplateFormatter`.

    Raises
    ------
    TemplateCompileError
        When ``template`` is not a string or its syntax is malformed.

    Examples
    --------
    >>> compile_template("[{Level:u3}] {Message}").template
    '[{Level:u3}] {Message}'
    >>> compile_template("[{Level] {Message}")
    Traceback (most recent call last):
    ...
    lib_log_console.domain.errors.TemplateCompileError: Invalid output template '[{Level] {Message}': expected '}' before end of string
    """
    if not isinstance(template, str):
        raise TemplateCompileError(f"Output template must be a string, got {type(template).__name__}")
    return OutputTemplateFormatter(template, _tokenise(template), format_provider, escape_values=escape_values)


__all__ = ["NEWLINE", "OutputTemplateFormatter", "compile_template"]
