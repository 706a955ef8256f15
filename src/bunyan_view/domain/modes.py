"""Output mode enumeration for record rendering.

Purpose
-------
Standardise the rendering strategies accepted by the formatter, the CLI
``--output`` flag, and the ``BUNYAN_VIEW_OUTPUT`` environment variable.

Contents
--------
* :class:`OutputMode` enumeration with a lenient resolver.
* :class:`UnknownOutputModeError` raised when dispatch meets a value outside
  the enumeration.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class UnknownOutputModeError(RuntimeError):
    """Raised when the formatter is asked to render with an unknown mode."""


class OutputMode(Enum):
    """Define the supported rendering strategies.

    Examples
    --------
    >>> OutputMode.SHORT.value
    5
    >>> OutputMode.BUNYAN.label
    'bunyan'
    """

    LONG = 1
    JSON = 2
    INSPECT = 3
    SIMPLE = 4
    SHORT = 5
    BUNYAN = 6

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def resolve(cls, value: Any) -> "OutputMode":
        """Return the mode named by ``value``; unrecognised input selects ``LONG``.

        Parameters
        ----------
        value:
            An :class:`OutputMode`, a mode id (``int`` or integer string), a
            mode name, or ``None``.

        Returns
        -------
        OutputMode
            Resolved enumeration member.

        Examples
        --------
        >>> OutputMode.resolve('short') is OutputMode.SHORT
        True
        >>> OutputMode.resolve('2') is OutputMode.JSON
        True
        >>> OutputMode.resolve('paul') is OutputMode.LONG
        True
        >>> OutputMode.resolve('yaml') is OutputMode.LONG
        True
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return _from_id(value)
        if isinstance(value, str):
            text = value.strip()
            try:
                return _from_id(int(text, 10))
            except ValueError:
                pass
            return _MODE_FROM_NAME.get(text.lower(), cls.LONG)
        return cls.LONG

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the public mode names in declaration order."""

        return tuple(member.label for member in cls)


def _from_id(value: int) -> OutputMode:
    try:
        return OutputMode(value)
    except ValueError:
        return OutputMode.LONG


_MODE_FROM_NAME: dict[str, OutputMode] = {
    "long": OutputMode.LONG,
    "paul": OutputMode.LONG,
    "json": OutputMode.JSON,
    "inspect": OutputMode.INSPECT,
    "simple": OutputMode.SIMPLE,
    "short": OutputMode.SHORT,
    "bunyan": OutputMode.BUNYAN,
}
# ``paul`` is the legacy alias of the long format.


__all__ = ["OutputMode", "UnknownOutputModeError"]
