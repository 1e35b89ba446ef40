"""Use case splitting a rendered block into individual console writes.

The destination console appends its own terminator to every write. Handing it
a block that already contains newlines (stack traces, ``{NewLine}`` tokens)
double-spaces the output, so each line is written separately instead.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from lib_log_console.application.ports.line_writer import LineWriterPort

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(block: str) -> list[str]:
    """Split ``block`` on CRLF, CR, or LF.

    Only those three terminators count; ``str.splitlines`` would also break on
    form feeds and unicode separators. Consecutive terminators keep their
    empty lines, and a block without terminators yields exactly one line.

    Examples
    --------
    >>> split_lines("a\\r\\nb\\rc\\nd")
    ['a', 'b', 'c', 'd']
    >>> split_lines("a\\n\\nb")
    ['a', '', 'b']
    >>> split_lines("")
    ['']
    """
    return _LINE_BREAK.split(block)


def create_emit_lines(writer: LineWriterPort) -> Callable[[str], int]:
    """Return a callable writing every line of a block through ``writer``.

    The callable returns the number of lines written.
    """

    def emit_lines(block: str) -> int:
        lines = split_lines(block)
        for line in lines:
            writer.write_line(line)
        return len(lines)

    return emit_lines


__all__ = ["create_emit_lines", "split_lines"]
