"""Exceptions raised while configuring sinks or rendering events.

All classes subclass :class:`ValueError` so callers that already guard
configuration with ``except ValueError`` keep working.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Sink options are contradictory or of the wrong type."""


class TemplateCompileError(ValueError):
    """An output template could not be parsed."""

    def __init__(self, message: str, *, template: str | None = None) -> None:
        super().__init__(message)
        self.template = template


class RenderError(ValueError):
    """A compiled template failed against a specific event's data."""


__all__ = ["ConfigurationError", "RenderError", "TemplateCompileError"]
