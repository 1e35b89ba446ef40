"""Rich-powered line writer implementing :class:`LineWriterPort`.

Purpose
-------
Print one line of markup-bearing text per call through
:class:`rich.console.Console`, which appends its own newline.

Contents
--------
* :class:`RichLineWriter` - adapter constructed by
  :func:`lib_log_console.console_sink` when no writer is supplied.

System Role
-----------
Primary human-facing destination. Rich console markup (``[bold red]...[/]``)
is interpreted by Rich itself; the sink passes text through untouched. A
line whose brackets do not form valid markup (``[/etc/app.conf]``) prints
verbatim instead of raising.
Uppercase bracketed text such as ``[INF]`` is not markup and prints verbatim.
"""

from __future__ import annotations

from rich.console import Console
from rich.errors import MarkupError

from lib_log_console.application.ports.line_writer import LineWriterPort


class RichLineWriter(LineWriterPort):
    """Write lines through Rich with optional colour control."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        markup: bool = True,
    ) -> None:
        """Configure the writer with colour and markup overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=True if force_color else None, no_color=no_color)
        self._markup = markup

    @property
    def console(self) -> Console:
        """Return the underlying Rich console."""
        return self._console

    def write_line(self, text: str) -> None:
        """Print ``text`` as one line.

        Soft wrapping keeps Rich from inserting its own line breaks into long
        lines. Text that Rich rejects as markup is printed literally.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True, width=40)
        >>> writer = RichLineWriter(console=console)
        >>> writer.write_line("[bold]ready[/bold] [INF]")
        >>> console.export_text()
        'ready [INF]\\n'
        """
        try:
            self._console.print(text, markup=self._markup, highlight=False, soft_wrap=True)
        except MarkupError:
            self._console.print(text, markup=False, highlight=False, soft_wrap=True)


__all__ = ["RichLineWriter"]
