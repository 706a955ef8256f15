"""Shared helpers for the test-suite."""

from __future__ import annotations

import re

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)
