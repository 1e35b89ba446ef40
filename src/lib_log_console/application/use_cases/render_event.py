"""Use case turning an event plus a resolved template into a text block.

Purpose
-------
Render each event with the formatter that matches its template while parsing
every distinct template string only once.

Contents
--------
* :class:`FormatterCache` - thread-safe template → formatter mapping.
* :class:`EventRenderer` - callable rendering one event to a trimmed block.
* :func:`create_render_event` - factory freezing the resolution mode.

System Role
-----------
Second stage of the sink pipeline. Fixed templates are compiled eagerly so
malformed configuration surfaces when the sink is built; selector templates
are compiled lazily on first use and cached for the sink's lifetime.
"""

from __future__ import annotations

import logging
import threading

from lib_log_console.application.ports.formatter import FormatProvider, TemplateCompiler, TextFormatterPort
from lib_log_console.domain.errors import ConfigurationError
from lib_log_console.domain.events import LogEvent
from lib_log_console.domain.templates import ResolutionMode

from .resolve_template import TemplateResolver

logger = logging.getLogger(__name__)


class FormatterCache:
    """Map template strings to compiled formatters.

    Lookups are lock-free. A miss compiles outside the lock and inserts with
    :meth:`dict.setdefault` under it, so two threads missing on the same key
    may both compile but only the first inserted formatter is ever returned.

    Examples
    --------
    >>> compiled = []
    >>> def compiler(template, provider=None):
    ...     compiled.append(template)
    ...     return template
    >>> cache = FormatterCache(compiler)
    >>> cache.get_or_compile("{Message}") is cache.get_or_compile("{Message}")
    True
    >>> compiled
    ['{Message}']
    """

    def __init__(self, compiler: TemplateCompiler, format_provider: FormatProvider | None = None) -> None:
        self._compiler = compiler
        self._format_provider = format_provider
        self._entries: dict[str, TextFormatterPort] = {}
        self._lock = threading.Lock()

    def get_or_compile(self, template: str) -> TextFormatterPort:
        """Return the formatter for ``template``, compiling it on first use.

        Compilation errors propagate to the caller and leave the cache as it
        was.
        """
        formatter = self._entries.get(template)
        if formatter is not None:
            return formatter
        candidate = self._compiler(template, self._format_provider)
        with self._lock:
            formatter = self._entries.setdefault(template, candidate)
            size = len(self._entries)
        if formatter is candidate:
            logger.debug("compiled output template %r (cache size %d)", template, size)
        return formatter

    def templates(self) -> list[str]:
        """Return the cached template strings in insertion order."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, template: object) -> bool:
        return template in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class EventRenderer:
    """Render events according to a frozen :class:`TemplateResolver`."""

    def __init__(
        self,
        resolver: TemplateResolver,
        compiler: TemplateCompiler,
        format_provider: FormatProvider | None = None,
    ) -> None:
        if resolver.mode is ResolutionMode.PREBUILT and format_provider is not None:
            raise ConfigurationError("format_provider cannot be combined with a prebuilt formatter")
        self._resolver = resolver
        self._cache: FormatterCache | None = None
        self._fixed: TextFormatterPort | None = None
        if resolver.mode is ResolutionMode.SELECTOR:
            self._cache = FormatterCache(compiler, format_provider)
        elif resolver.formatter is not None:
            self._fixed = resolver.formatter
        else:
            self._fixed = compiler(resolver.output_template or "", format_provider)

    @property
    def cache(self) -> FormatterCache | None:
        """Return the selector cache; ``None`` for fixed or prebuilt modes."""
        return self._cache

    def formatter_for(self, event: LogEvent) -> TextFormatterPort:
        """Return the formatter that renders ``event``."""
        if self._fixed is not None:
            return self._fixed
        template = self._resolver.resolve(event)
        if template is None or self._cache is None:
            raise ConfigurationError(f"no template resolved in {self._resolver.mode.value} mode")
        return self._cache.get_or_compile(template)

    def __call__(self, event: LogEvent) -> str:
        """Render ``event`` and strip trailing whitespace from the block."""
        return self.formatter_for(event).format(event).rstrip()


def create_render_event(
    resolver: TemplateResolver,
    compiler: TemplateCompiler,
    format_provider: FormatProvider | None = None,
) -> EventRenderer:
    """Build the renderer for ``resolver``.

    Parameters
    ----------
    resolver:
        Validated resolution configuration.
    compiler:
        Callable compiling a template string into a formatter.
    format_provider:
        Optional provider passed through to every compilation.

    Raises
    ------
    ConfigurationError
        When ``format_provider`` is combined with a prebuilt formatter.
    TemplateCompileError
        When a fixed template is malformed.
    """

    return EventRenderer(resolver, compiler, format_provider)


__all__ = ["EventRenderer", "FormatterCache", "create_render_event"]
