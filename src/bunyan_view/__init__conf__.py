"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

import sys
from typing import Callable

name = "bunyan_view"
title = "Pretty-print Bunyan line-delimited JSON logs for terminals"
version = "0.1.0"
author = "bunyan_view contributors"
shell_command = "bunyan-view"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for bunyan_view:\\n\\n'
    """

    write = writer or sys.stdout.write
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    write(f"Info for {name}:\n\n")
    write("".join(f"    {label:<{pad}} = {value}\n" for label, value in fields))


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
