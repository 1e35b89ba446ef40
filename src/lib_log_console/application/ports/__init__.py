"""Ports consumed by the application use cases."""

from __future__ import annotations

from .formatter import FormatProvider, TemplateCompiler, TextFormatterPort
from .line_writer import LineWriterPort

__all__ = ["FormatProvider", "LineWriterPort", "TemplateCompiler", "TextFormatterPort"]
