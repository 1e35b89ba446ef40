"""Log level abstraction with console abbreviations and stdlib mapping.

Purpose
-------
Offer a domain-specific representation of log severities that carries the
three-letter codes printed by output templates (``[INF]``) and translates to
and from the stdlib :mod:`logging` integers.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.
* ``_CODE_TABLE`` constant mapping levels to their three-letter codes.

System Role
-----------
Consumed by the template formatter for ``{Level}`` tokens and by the stdlib
logging bridge when converting :class:`logging.LogRecord` severities.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    VERBOSE = 5
    DEBUG = 10
    INFORMATION = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50

    @property
    def title(self) -> str:
        """Return the title-cased name rendered by ``{Level}`` without a format."""

        return self.name.title()

    @property
    def code(self) -> str:
        """Return the three-letter uppercase abbreviation (``INF``, ``ERR``...)."""

        return _CODE_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` integer matching this level."""

        return self.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level into the closest :class:`LogLevel`.

        Custom levels map to the highest member whose value does not exceed
        ``level``; anything below ``VERBOSE`` maps to ``VERBOSE``.

        Examples
        --------
        >>> LogLevel.from_python_level(20) is LogLevel.INFORMATION
        True
        >>> LogLevel.from_python_level(25) is LogLevel.INFORMATION
        True
        >>> LogLevel.from_python_level(0) is LogLevel.VERBOSE
        True
        """
        resolved = cls.VERBOSE
        for member in cls:
            if member.value <= level:
                resolved = member
        return resolved


_CODE_TABLE = {
    LogLevel.VERBOSE: "VRB",
    LogLevel.DEBUG: "DBG",
    LogLevel.INFORMATION: "INF",
    LogLevel.WARNING: "WRN",
    LogLevel.ERROR: "ERR",
    LogLevel.FATAL: "FTL",
}
# Abbreviations rendered by ``{Level:u3}``.

_ALIASES = {
    "TRACE": "VERBOSE",
    "INFO": "INFORMATION",
    "WARN": "WARNING",
    "CRITICAL": "FATAL",
}


__all__ = ["LogLevel"]
