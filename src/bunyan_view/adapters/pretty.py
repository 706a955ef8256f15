"""Rich-powered structure dump used by ``inspect`` mode and leftover fields.

Purpose
-------
Render arbitrary nested record data the way a developer console would: deep,
pretty-printed, and syntax-highlighted when colour is enabled.

Contents
--------
* :func:`inspect_value` - plain or highlighted dump of any value.
* :func:`indent_block` - prefix every line of a block with four spaces.

System Role
-----------
Shared by the record formatter for ``OutputMode.INSPECT`` and for the leftover
details block in long/short modes.
"""

from __future__ import annotations

import re
from io import StringIO
from typing import Any

from rich.console import Console
from rich.pretty import Pretty, pretty_repr

DUMP_WIDTH = 80
INDENT = "    "

_LINE_BREAK = re.compile(r"\r?\n")


def inspect_value(value: Any, *, colorize: bool, width: int = DUMP_WIDTH) -> str:
    """Return a deep structure dump of ``value`` without a trailing newline.

    Layout is decided by ``width`` alone; long strings stay on one line in
    both the plain and the highlighted rendering.

    Examples
    --------
    >>> inspect_value({'req.foo': 'bar'}, colorize=False)
    "{'req.foo': 'bar'}"
    >>> '\\x1b[' in inspect_value({'a': 1}, colorize=True)
    True
    """

    if not colorize:
        return pretty_repr(value, max_width=width, indent_size=4)
    console = Console(
        file=StringIO(),
        width=width,
        force_terminal=True,
        color_system="standard",
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(Pretty(value, indent_size=4), end="", soft_wrap=True)
    return capture.get().rstrip("\n")


def indent_block(text: str) -> str:
    """Indent each line of ``text`` by four spaces.

    Examples
    --------
    >>> indent_block('a\\nb')
    '    a\\n    b'
    """

    return INDENT + ("\n" + INDENT).join(_LINE_BREAK.split(text))


__all__ = ["DUMP_WIDTH", "indent_block", "inspect_value"]
