"""Use case deciding which template string formats a given event.

Purpose
-------
Capture the three mutually exclusive configuration shapes (fixed template,
selector callable, prebuilt formatter) in one immutable object and answer the
single question "which template applies to this event?".

Contents
--------
* :data:`TemplateSelector` - callable signature accepted in selector mode.
* :class:`TemplateResolver` - validated, frozen resolution configuration.

System Role
-----------
First stage of the sink pipeline; its output feeds
:func:`lib_log_console.application.use_cases.render_event.create_render_event`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from lib_log_console.application.ports.formatter import TextFormatterPort
from lib_log_console.domain.errors import ConfigurationError, TemplateCompileError
from lib_log_console.domain.events import LogEvent
from lib_log_console.domain.templates import DEFAULT_OUTPUT_TEMPLATE, ResolutionMode

TemplateSelector = Callable[[LogEvent], str]


@dataclass(frozen=True, slots=True)
class TemplateResolver:
    """Immutable choice of how events map to templates.

    Build instances through :meth:`from_options`, which enforces that exactly
    one resolution mode is active.

    Examples
    --------
    >>> TemplateResolver.from_options().mode
    <ResolutionMode.FIXED: 'fixed'>
    >>> TemplateResolver.from_options(output_template="{Message}", template_selector=lambda e: "x")
    Traceback (most recent call last):
    ...
    lib_log_console.domain.errors.ConfigurationError: configure only one of output_template, template_selector, formatter (got: output_template, template_selector)
    """

    mode: ResolutionMode
    output_template: str | None = None
    selector: TemplateSelector | None = None
    formatter: TextFormatterPort | None = None

    @classmethod
    def from_options(
        cls,
        output_template: str | None = None,
        template_selector: TemplateSelector | None = None,
        formatter: TextFormatterPort | None = None,
        *,
        default_template: str = DEFAULT_OUTPUT_TEMPLATE,
    ) -> "TemplateResolver":
        """Validate the options and return the matching resolver.

        Parameters
        ----------
        output_template:
            Single template applied to every event.
        template_selector:
            Callable mapping each event to its template string.
        formatter:
            Prebuilt formatter bypassing template resolution.
        default_template:
            Template used when none of the above is supplied.

        Raises
        ------
        ConfigurationError
            When more than one option is supplied or an option has the wrong
            type.
        """

        supplied = [
            name
            for name, value in (
                ("output_template", output_template),
                ("template_selector", template_selector),
                ("formatter", formatter),
            )
            if value is not None
        ]
        if len(supplied) > 1:
            raise ConfigurationError(
                "configure only one of output_template, template_selector, formatter (got: " + ", ".join(supplied) + ")"
            )

        if formatter is not None:
            if not callable(getattr(formatter, "format", None)):
                raise ConfigurationError("formatter must provide a format(event) method")
            return cls(mode=ResolutionMode.PREBUILT, formatter=formatter)

        if template_selector is not None:
            if not callable(template_selector):
                raise ConfigurationError("template_selector must be callable")
            return cls(mode=ResolutionMode.SELECTOR, selector=template_selector)

        template = default_template if output_template is None else output_template
        if not isinstance(template, str):
            raise ConfigurationError(f"output_template must be a string, got {type(template).__name__}")
        return cls(mode=ResolutionMode.FIXED, output_template=template)

    def resolve(self, event: LogEvent) -> str | None:
        """Return the template for ``event``; ``None`` in prebuilt mode."""

        if self.mode is ResolutionMode.PREBUILT:
            return None
        if self.selector is None:
            return self.output_template
        template = self.selector(event)
        if not isinstance(template, str):
            raise TemplateCompileError(f"template selector returned {type(template).__name__}, expected str")
        return template


__all__ = ["TemplateResolver", "TemplateSelector"]
