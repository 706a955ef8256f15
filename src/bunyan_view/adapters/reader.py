"""Line-delimited JSON reader feeding the formatter.

Purpose
-------
Decode input lines into record mappings. Lines that are not JSON objects are
handed back untouched so callers can echo them, which keeps mixed output
(stack dumps, startup banners) readable.

Contents
--------
* :class:`InputLine` - decoded record (or ``None``) plus the raw text.
* :func:`read_records` - decode an iterable of lines.
* :func:`iter_paths` - stream lines from files, ``-`` meaning stdin.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class InputLine:
    """One input line and, when it decoded to a JSON object, its record."""

    raw: str
    record: dict[str, Any] | None = None


def decode_line(line: str) -> InputLine:
    """Decode ``line`` into an :class:`InputLine`.

    Examples
    --------
    >>> decode_line('{"msg": "hi"}\\n').record
    {'msg': 'hi'}
    >>> decode_line('plain text').record is None
    True
    >>> decode_line('[1, 2]').record is None
    True
    """

    raw = line.rstrip("\r\n")
    if not raw.lstrip().startswith("{"):
        return InputLine(raw=raw)
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("line is not valid JSON; passing through", extra={"line": raw[:200]})
        return InputLine(raw=raw)
    if not isinstance(payload, dict):
        return InputLine(raw=raw)
    return InputLine(raw=raw, record=payload)


def read_records(lines: Iterable[str]) -> Iterator[InputLine]:
    """Yield decoded lines one at a time, preserving input order."""

    for line in lines:
        yield decode_line(line)


def iter_paths(paths: Sequence[str | Path]) -> Iterator[str]:
    """Yield lines from ``paths`` in order; no paths (or ``-``) reads stdin."""

    if not paths:
        yield from sys.stdin
        return
    for path in paths:
        if str(path) == "-":
            yield from sys.stdin
            continue
        with open(path, encoding="utf-8", errors="replace") as handle:
            yield from handle


__all__ = ["InputLine", "decode_line", "iter_paths", "read_records"]
