"""Template constants and resolution modes shared across layers.

Contents
--------
* :data:`DEFAULT_OUTPUT_TEMPLATE` - template used when nothing is configured.
* :class:`ResolutionMode` - which of the three configuration shapes is active.
"""

from __future__ import annotations

from enum import Enum


DEFAULT_OUTPUT_TEMPLATE = "{Timestamp:yyyy-MM-dd HH:mm:ss.fff} [{Level:u3}] {Message:lj}{NewLine}{Exception}"
"""Second-precision timestamp with milliseconds, 3-letter level, message, exception."""


class ResolutionMode(Enum):
    """Define how a sink decides which formatter renders an event.

    Examples
    --------
    >>> ResolutionMode.SELECTOR.value
    'selector'
    """

    FIXED = "fixed"
    SELECTOR = "selector"
    PREBUILT = "prebuilt"


__all__ = ["DEFAULT_OUTPUT_TEMPLATE", "ResolutionMode"]
