"""Formatter ports describing the template-rendering capability.

Purpose
-------
Define the narrow contracts the renderer depends on: something that turns an
event into text, something that compiles a template string into such a thing,
and an optional provider for culture-sensitive value formatting.

Contents
--------
* :class:`TextFormatterPort` - render one :class:`LogEvent` to text.
* :class:`TemplateCompiler` - compile a template string into a formatter.
* :class:`FormatProvider` - optional per-value formatting override.

System Role
-----------
Keeps the Renderer/Cache use case free of any concrete template syntax so
tests can inject counting compilers and prebuilt formatters.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lib_log_console.domain.events import LogEvent


@runtime_checkable
class TextFormatterPort(Protocol):
    """Render a log event into a (possibly multi-line) text block."""

    def format(self, event: LogEvent) -> str:
        """Return ``event`` rendered as text."""


@runtime_checkable
class FormatProvider(Protocol):
    """Override how individual values are rendered.

    Returning ``None`` defers to the built-in rendering for that value.
    """

    def format_value(self, value: Any, format_spec: str | None) -> str | None:
        """Return ``value`` rendered with ``format_spec`` or ``None``."""


@runtime_checkable
class TemplateCompiler(Protocol):
    """Parse a template string once into a reusable formatter."""

    def __call__(self, template: str, format_provider: FormatProvider | None = None) -> TextFormatterPort: ...


__all__ = ["FormatProvider", "TemplateCompiler", "TextFormatterPort"]
