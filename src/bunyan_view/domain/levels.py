"""Bunyan log level registry with presentation metadata.

Purpose
-------
Map the numeric Bunyan severities onto the names, prefixes, and colour tags
used when rendering records for humans.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.
* ``_COLOR_TABLE`` constant mapping levels to palette tags.
* Tolerant lookups (:func:`level_prefix`, :func:`level_upper_name`,
  :func:`level_color`) that never fail on unknown numeric levels.

System Role
-----------
Consulted by the record formatter for the level bracket, the emitter name
colour, and the ``simple`` output mode.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class LogLevel(Enum):
    """Enumerated Bunyan levels."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60

    @property
    def severity(self) -> str:
        """Return the lowercase level name used in records and CLI flags."""

        return self.name.lower()

    @property
    def upper_name(self) -> str:
        return self.name

    @property
    def padded_name(self) -> str:
        """Return the upper-cased name padded to five characters.

        Examples
        --------
        >>> LogLevel.INFO.padded_name
        ' INFO'
        >>> LogLevel.ERROR.padded_name
        'ERROR'
        """

        return (" " if len(self.name) == 4 else "") + self.name

    @property
    def prefix(self) -> str:
        """Return the single-letter prefix shown inside the level bracket."""

        return self.severity[:1]

    @property
    def color(self) -> str:
        """Return the palette tag used to colour this level."""

        return _COLOR_TABLE[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def lookup(cls, value: Any) -> "LogLevel | None":
        """Return the member for ``value`` or ``None`` when it is not a known level.

        Examples
        --------
        >>> LogLevel.lookup(30) is LogLevel.INFO
        True
        >>> LogLevel.lookup(35) is None
        True
        >>> LogLevel.lookup(True) is None
        True
        """

        if isinstance(value, bool) or not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


_COLOR_TABLE = {
    LogLevel.TRACE: "WHITE",
    LogLevel.DEBUG: "green",
    LogLevel.INFO: "cyan",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "RED",
    LogLevel.FATAL: "inverse",
}
# Palette tags (see :mod:`bunyan_view.domain.palette`) per level.


def level_prefix(value: Any) -> str:
    """Return the bracket prefix for ``value``, falling back to the raw value."""

    level = LogLevel.lookup(value)
    return level.prefix if level is not None else str(value)


def level_upper_name(value: Any) -> str:
    """Return the upper-cased level name, or ``LVL<value>`` for unknown levels.

    Examples
    --------
    >>> level_upper_name(50)
    'ERROR'
    >>> level_upper_name(55)
    'LVL55'
    """

    level = LogLevel.lookup(value)
    return level.upper_name if level is not None else f"LVL{value}"


def level_color(value: Any) -> str | None:
    level = LogLevel.lookup(value)
    return level.color if level is not None else None


__all__ = ["LogLevel", "level_color", "level_prefix", "level_upper_name"]
