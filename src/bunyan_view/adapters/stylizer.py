"""ANSI stylizer bound to a colour flag fixed at construction.

Purpose
-------
Wrap text fragments in the SGR sequences of :mod:`bunyan_view.domain.palette`
so the rendered output stays byte-compatible with the classic ``bunyan``
viewer.

Contents
--------
* :class:`Stylizer` - stateless apart from the colour flag.
"""

from __future__ import annotations

from bunyan_view.domain.palette import RESET, sgr_prefix


class Stylizer:
    """Colour text fragments by palette tag.

    Examples
    --------
    >>> Stylizer(color=False).stylize('x', 'red')
    'x'
    >>> Stylizer(color=True).stylize('x', 'red') == '\\x1b[31mx\\x1b[0m'
    True
    >>> Stylizer(color=True).stylize('', 'red')
    ''
    >>> Stylizer(color=True).stylize('x', 'chartreuse')
    'x'
    """

    __slots__ = ("_color",)

    def __init__(self, *, color: bool) -> None:
        self._color = bool(color)

    @property
    def color(self) -> bool:
        return self._color

    def stylize(self, text: str, tag: str | None) -> str:
        if not self._color:
            return text
        if not text:
            return ""
        prefix = sgr_prefix(tag) if tag else None
        if prefix is None:
            return text
        return f"{prefix}{text}{RESET}"


__all__ = ["Stylizer"]
