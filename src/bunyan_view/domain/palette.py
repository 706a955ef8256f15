"""ANSI SGR palette shared by every coloured fragment.

Upper-case tags denote the bold variant of the base colour. ``blue`` and
``grey`` read poorly on common dark themes, so the level table avoids them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

ESC = "\x1b"
RESET = f"{ESC}[0m"

COLORS: Mapping[str, tuple[int, ...]] = MappingProxyType(
    {
        "bold": (1,),
        "italic": (3,),
        "underline": (4,),
        "inverse": (7, 1, 31, 47),
        "white": (37,),
        "WHITE": (1, 37),
        "black": (30,),
        "BLACK": (1, 30),
        "blue": (34,),
        "cyan": (36,),
        "green": (32,),
        "GREEN": (1, 32),
        "magenta": (35,),
        "red": (31,),
        "RED": (1, 31),
        "yellow": (33,),
    }
)


def sgr_prefix(tag: str) -> str | None:
    """Return the opening escape sequence for ``tag`` or ``None`` when unknown.

    Examples
    --------
    >>> sgr_prefix('inverse') == '\\x1b[7;1;31;47m'
    True
    >>> sgr_prefix('grey') is None
    True
    """

    codes = COLORS.get(tag)
    if not codes:
        return None
    return f"{ESC}[{';'.join(str(code) for code in codes)}m"


__all__ = ["COLORS", "ESC", "RESET", "sgr_prefix"]
