"""Timestamp column with run-length suppression of repeated values.

Purpose
-------
Prefix each rendered record with a compact ``HH:MM.SS`` column, print a
``---YYYY.M.D---`` banner whenever the date changes, and blank the column for
consecutive records stamped within the same second.

Contents
--------
* :func:`format_date` / :func:`format_time` - column formatting.
* :class:`TimestampRenderer` - per-stream state (last date, last time).

System Role
-----------
The only cross-record state of the formatter. Each :class:`RecordFormatter`
owns one renderer, so independent output streams never interfere.
"""

from __future__ import annotations

import re
from datetime import datetime

from bunyan_view.adapters.stylizer import Stylizer

TS_PADDING = " " * 9
# Width of ``HH:MM.SS`` plus the separating space.

_LINE_BREAK = re.compile(r"\r?\n")


def format_time(ts: datetime) -> str:
    """Return ``HH:MM.SS``.

    Examples
    --------
    >>> format_time(datetime(2024, 1, 2, 3, 4, 5))
    '03:04.05'
    """

    return f"{ts.hour:02d}:{ts.minute:02d}.{ts.second:02d}"


def format_date(ts: datetime) -> str:
    """Return ``YYYY.M.D`` without zero padding.

    Examples
    --------
    >>> format_date(datetime(2024, 1, 2, 3, 4, 5))
    '2024.1.2'
    """

    return f"{ts.year}.{ts.month}.{ts.day}"


def align_body(body: str) -> str:
    """Drop blank lines and indent continuation lines under the body column.

    Examples
    --------
    >>> align_body('first\\n\\nsecond\\r\\nthird\\n')
    'first\\n         second\\n         third'
    """

    lines = [line for line in _LINE_BREAK.split(body or "") if line]
    return ("\n" + TS_PADDING).join(lines)


class TimestampRenderer:
    """Render record bodies under a de-duplicated timestamp column."""

    def __init__(self, stylizer: Stylizer) -> None:
        self._stylize = stylizer.stylize
        self.last_date: str | None = None
        self.last_time: str | None = None

    def render(self, ts: datetime, body: str) -> list[str]:
        """Return the chunks for ``body`` stamped at ``ts``.

        Examples
        --------
        >>> renderer = TimestampRenderer(Stylizer(color=False))
        >>> renderer.render(datetime(2024, 1, 2, 3, 4, 5), 'one')
        ['---2024.1.2---\\n', '03:04.05 one\\n']
        >>> renderer.render(datetime(2024, 1, 2, 3, 4, 5), 'two')
        ['         two\\n']
        """

        text = align_body(body)
        time_text = format_time(ts)
        date_text = format_date(ts)
        chunks: list[str] = []

        if self.last_date != date_text:
            self.last_date = date_text
            chunks.append(self._stylize(f"---{date_text}---", "GREEN") + "\n")

        if self.last_time == time_text:
            chunks.append(TS_PADDING + text + "\n")
        else:
            self.last_time = time_text
            chunks.append(self._stylize(time_text, "GREEN") + " " + text + "\n")
        return chunks


__all__ = ["TS_PADDING", "TimestampRenderer", "align_body", "format_date", "format_time"]
