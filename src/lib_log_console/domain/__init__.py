"""Domain entities and value objects used by the console sink."""

from __future__ import annotations

from .errors import ConfigurationError, RenderError, TemplateCompileError
from .events import LogEvent
from .levels import LogLevel
from .templates import DEFAULT_OUTPUT_TEMPLATE, ResolutionMode

__all__ = [
    "ConfigurationError",
    "DEFAULT_OUTPUT_TEMPLATE",
    "LogEvent",
    "LogLevel",
    "RenderError",
    "ResolutionMode",
    "TemplateCompileError",
]
