"""Line writer port describing the console output contract.

The destination appends its own line terminator to every write, which is why
the sink hands it one line at a time. Text may carry console markup; the
port treats it as opaque.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LineWriterPort(Protocol):
    """Write one line of (possibly markup-bearing) text to a console."""

    def write_line(self, text: str) -> None:
        """Print ``text`` followed by the destination's own terminator."""


__all__ = ["LineWriterPort"]
