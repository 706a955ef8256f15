"""Record conventions: required fields, validation, and timestamp coercion.

Purpose
-------
Describe the Bunyan record convention the formatter consumes without owning
the schema. Records stay plain mappings; this module only answers "is this a
Bunyan record", "when did it happen", and "what text stands in for it".

Contents
--------
* ``REQUIRED_FIELDS`` - keys a record must carry to be rendered in full.
* :func:`is_valid_record` - presence check for the required keys.
* :func:`working_copy` - owned, mutable deep copy used by the extraction steps.
* :func:`parse_timestamp` - lenient conversion of ``time`` into a local datetime.
* :func:`compact_json` - one-line JSON encoding shared by passthrough paths.
"""

from __future__ import annotations

import copy
import json
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

REQUIRED_FIELDS: tuple[str, ...] = ("v", "level", "name", "hostname", "pid", "time", "msg")

Record = dict[str, Any]

_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)")


def is_valid_record(record: Mapping[str, Any]) -> bool:
    """Return ``True`` when every required field is present and not ``None``.

    Examples
    --------
    >>> is_valid_record({'v': 0, 'level': 30, 'name': 'n', 'hostname': 'h', 'pid': 1, 'time': 't', 'msg': ''})
    True
    >>> is_valid_record({'v': 0, 'level': 30, 'name': 'n', 'hostname': 'h', 'pid': 1, 'time': 't', 'msg': None})
    False
    """

    return all(record.get(key) is not None for key in REQUIRED_FIELDS)


def working_copy(record: Mapping[str, Any]) -> Record:
    """Return a deep copy the extraction steps may consume freely."""

    return copy.deepcopy(dict(record))


def parse_timestamp(value: Any, *, now: datetime | None = None) -> tuple[datetime, bool]:
    """Convert a record ``time`` value into a local, naive datetime.

    Accepts ISO-8601 strings (a trailing ``Z`` is understood), epoch
    milliseconds, and :class:`datetime` instances. Aware values are converted
    to local time; naive values are taken as local already.

    Returns
    -------
    tuple[datetime, bool]
        The timestamp and whether it was parsed (``False`` means ``now`` was
        substituted).

    Examples
    --------
    >>> parse_timestamp('2024-03-05T06:07:08')[0]
    datetime.datetime(2024, 3, 5, 6, 7, 8)
    >>> parse_timestamp('not a date', now=datetime(2020, 1, 1))
    (datetime.datetime(2020, 1, 1, 0, 0), False)
    """

    parsed = _coerce_datetime(value)
    if parsed is None:
        return (now or datetime.now()), False
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed, True


def _coerce_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(_six_digit_fraction, text, count=1)
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _six_digit_fraction(match: re.Match[str]) -> str:
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    return "." + match.group(1)[:6].ljust(6, "0")


def compact_json(value: Any) -> str:
    """Encode ``value`` as single-line JSON without padding.

    Examples
    --------
    >>> compact_json({'a': 1, 'b': [1, 2]})
    '{"a":1,"b":[1,2]}'
    """

    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


__all__ = [
    "REQUIRED_FIELDS",
    "Record",
    "compact_json",
    "is_valid_record",
    "parse_timestamp",
    "working_copy",
]
