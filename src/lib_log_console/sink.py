"""Console sink façade wiring the resolve → render → emit pipeline.

Purpose
-------
Expose the single registration entry point, :func:`console_sink`, that turns
one of three configuration shapes into a ready :class:`ConsoleLineSink`:

* a fixed output template (optionally with a format provider),
* a template selector callable (optionally with a format provider),
* a prebuilt formatter.

Contents
--------
* :class:`ConsoleLineSink` - object exposing ``emit(event)``.
* :func:`console_sink` - composition root for a sink.

System Role
-----------
The only place where ports meet adapters. Everything runs synchronously on
the caller's thread; the formatter cache is the only shared mutable state.
"""

from __future__ import annotations

import logging
import threading
from functools import partial
from collections.abc import Callable

from lib_log_console.adapters.console.rich_console import RichLineWriter
from lib_log_console.adapters.template_formatter import compile_template
from lib_log_console.application.ports.formatter import FormatProvider, TemplateCompiler, TextFormatterPort
from lib_log_console.application.ports.line_writer import LineWriterPort
from lib_log_console.application.use_cases.emit_lines import create_emit_lines
from lib_log_console.application.use_cases.render_event import EventRenderer, FormatterCache, create_render_event
from lib_log_console.application.use_cases.resolve_template import TemplateResolver, TemplateSelector
from lib_log_console.config import build_sink_settings
from lib_log_console.domain.events import LogEvent
from lib_log_console.domain.templates import DEFAULT_OUTPUT_TEMPLATE, ResolutionMode

logger = logging.getLogger(__name__)


class ConsoleLineSink:
    """Render events and write each resulting line to a console.

    Rendering happens without holding any sink lock; the writes for one event
    happen under the sink's lock so its lines stay contiguous when several
    threads log through the same sink.
    """

    def __init__(
        self,
        *,
        resolver: TemplateResolver,
        render: EventRenderer,
        emit_lines: Callable[[str], int],
        writer: LineWriterPort,
    ) -> None:
        self._resolver = resolver
        self._render = render
        self._emit_lines = emit_lines
        self._writer = writer
        self._write_lock = threading.Lock()

    @property
    def mode(self) -> ResolutionMode:
        """Return the active template resolution mode."""
        return self._resolver.mode

    @property
    def formatter_cache(self) -> FormatterCache | None:
        """Return the selector-mode formatter cache, ``None`` otherwise."""
        return self._render.cache

    @property
    def writer(self) -> LineWriterPort:
        """Return the line writer receiving output."""
        return self._writer

    def render(self, event: LogEvent) -> str:
        """Return the trimmed text block for ``event`` without writing it."""
        return self._render(event)

    def emit(self, event: LogEvent) -> None:
        """Render ``event`` and write its lines in order.

        Template compile and render errors propagate to the caller; nothing
        is written for that event.
        """
        block = self._render(event)
        with self._write_lock:
            self._emit_lines(block)


def console_sink(
    output_template: str | None = None,
    *,
    template_selector: TemplateSelector | None = None,
    formatter: TextFormatterPort | None = None,
    format_provider: FormatProvider | None = None,
    writer: LineWriterPort | None = None,
    force_color: bool = False,
    no_color: bool = False,
    escape_values: bool = False,
    compiler: TemplateCompiler = compile_template,
) -> ConsoleLineSink:
    """Compose a :class:`ConsoleLineSink` from one configuration shape.

    Parameters
    ----------
    output_template:
        Template applied to every event. Compiled immediately.
    template_selector:
        Callable choosing a template per event; compiled templates are
        cached by their exact text.
    formatter:
        Prebuilt formatter used for every event; bypasses templates.
    format_provider:
        Provider for culture-sensitive tokens, passed to every compilation.
        Not accepted together with ``formatter``.
    writer:
        Destination for lines; defaults to a :class:`RichLineWriter`.
    force_color, no_color:
        Colour overrides for the default writer; ``LOG_FORCE_COLOR`` and
        ``LOG_NO_COLOR`` take precedence.
    escape_values:
        Escape Rich markup in text rendered from event data so only the
        template's literal markup is interpreted. Ignored for ``formatter``.
    compiler:
        Template compiler; replaceable for tests and custom syntaxes. With
        ``escape_values`` it must accept an ``escape_values`` keyword.

    Raises
    ------
    ConfigurationError
        When more than one of ``output_template``, ``template_selector`` and
        ``formatter`` is given, or ``format_provider`` accompanies
        ``formatter``.
    TemplateCompileError
        When a fixed template is malformed.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_console.domain.levels import LogLevel
    >>> class Collector:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def write_line(self, text):
    ...         self.lines.append(text)
    >>> collector = Collector()
    >>> sink = console_sink("{Message:lj}{NewLine}  at {Where:l}{NewLine}", writer=collector)
    >>> sink.emit(LogEvent(datetime.now(timezone.utc), LogLevel.ERROR, "boom", {"Where": "main"}))
    >>> collector.lines
    ['boom', '  at main']
    """

    settings = build_sink_settings(
        output_template=output_template,
        template_selector=template_selector,
        formatter=formatter,
        force_color=force_color,
        no_color=no_color,
    )
    resolver = TemplateResolver.from_options(
        output_template,
        template_selector,
        formatter,
        default_template=settings.default_template or DEFAULT_OUTPUT_TEMPLATE,
    )
    if escape_values:
        compiler = partial(compiler, escape_values=True)
    render = create_render_event(resolver, compiler, format_provider)
    if writer is None:
        writer = RichLineWriter(force_color=settings.force_color, no_color=settings.no_color)
    logger.debug("console sink configured in %s mode", resolver.mode.value)
    return ConsoleLineSink(
        resolver=resolver,
        render=render,
        emit_lines=create_emit_lines(writer),
        writer=writer,
    )


__all__ = ["ConsoleLineSink", "console_sink"]
