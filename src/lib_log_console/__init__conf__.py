"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from typing import Callable

name = "lib_log_console"
title = "Template-driven console sink that writes every rendered log line separately"
version = "0.1.0"
shell_command = "lib_log_console"


def print_info(writer: Callable[[str], object] = print) -> None:
    """Write the metadata banner through ``writer``, one line per call.

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_log_console:
    ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:")
    writer("")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}")


def summary_info() -> str:
    """Return the metadata banner as one newline-terminated string."""
    lines: list[str] = []
    print_info(lines.append)
    return "\n".join(lines) + "\n"
