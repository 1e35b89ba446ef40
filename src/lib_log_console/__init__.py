"""Public package surface for the template-driven console sink.

``console_sink`` builds a sink from a fixed template, a template selector, or
a prebuilt formatter; ``ConsoleSinkHandler`` plugs a sink into the stdlib
:mod:`logging` pipeline.
"""

from __future__ import annotations

from .adapters import (
    ConsoleSinkHandler,
    JsonLinesFormatter,
    OutputTemplateFormatter,
    RichLineWriter,
    TimezoneFormatProvider,
    compile_template,
)
from .application.ports import FormatProvider, LineWriterPort, TextFormatterPort
from .domain import (
    DEFAULT_OUTPUT_TEMPLATE,
    ConfigurationError,
    LogEvent,
    LogLevel,
    RenderError,
    ResolutionMode,
    TemplateCompileError,
)
from .sink import ConsoleLineSink, console_sink

__all__ = [
    "ConfigurationError",
    "ConsoleLineSink",
    "ConsoleSinkHandler",
    "DEFAULT_OUTPUT_TEMPLATE",
    "FormatProvider",
    "JsonLinesFormatter",
    "LineWriterPort",
    "LogEvent",
    "LogLevel",
    "OutputTemplateFormatter",
    "RenderError",
    "ResolutionMode",
    "RichLineWriter",
    "TemplateCompileError",
    "TextFormatterPort",
    "TimezoneFormatProvider",
    "compile_template",
    "console_sink",
]
