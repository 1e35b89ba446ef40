"""Use cases composing the per-event pipeline: resolve, render, emit."""

from __future__ import annotations

from .emit_lines import create_emit_lines, split_lines
from .render_event import EventRenderer, FormatterCache, create_render_event
from .resolve_template import TemplateResolver, TemplateSelector

__all__ = [
    "EventRenderer",
    "FormatterCache",
    "TemplateResolver",
    "TemplateSelector",
    "create_emit_lines",
    "create_render_event",
    "split_lines",
]
