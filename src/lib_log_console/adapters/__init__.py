"""Adapters implementing the application ports."""

from __future__ import annotations

from .console import RichLineWriter
from .format_providers import TimezoneFormatProvider
from .json_formatter import JsonLinesFormatter
from .logging_handler import ConsoleSinkHandler, record_to_event
from .template_formatter import OutputTemplateFormatter, compile_template

__all__ = [
    "ConsoleSinkHandler",
    "JsonLinesFormatter",
    "OutputTemplateFormatter",
    "RichLineWriter",
    "TimezoneFormatProvider",
    "compile_template",
    "record_to_event",
]
