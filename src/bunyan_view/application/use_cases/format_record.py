"""Record formatter: one decoded record in, rendered text chunks out.

Purpose
-------
Dispatch each record to the rendering rule of the configured
:class:`~bunyan_view.domain.modes.OutputMode`. Long and short modes run the
extraction steps from :mod:`.extract` over an owned copy of the record and
stamp the result through a :class:`~.timestamps.TimestampRenderer`.

Contents
--------
* :func:`coerce_json_indent` - normalise ``bool``/``int`` indent settings.
* :class:`RecordFormatter` - per-stream formatter with ``format``,
  ``transform``, and ``write``.

System Role
-----------
The core of the package. Reading input, parsing flags, and owning the output
stream are the business of :mod:`bunyan_view.adapters` and
:mod:`bunyan_view.cli`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from bunyan_view.adapters.pretty import inspect_value
from bunyan_view.adapters.reader import InputLine
from bunyan_view.adapters.stylizer import Stylizer
from bunyan_view.application.ports.output import OutputPort
from bunyan_view.domain.levels import level_upper_name
from bunyan_view.domain.modes import OutputMode, UnknownOutputModeError
from bunyan_view.domain.records import compact_json, is_valid_record, parse_timestamp, working_copy

from .extract import (
    BODY_STEPS,
    Fragment,
    take_hostname,
    take_leftover,
    take_level,
    take_msg,
    take_name,
    take_req_id,
    take_src,
    take_timestamp,
)
from .timestamps import TimestampRenderer

logger = logging.getLogger(__name__)


def coerce_json_indent(value: Any) -> int:
    """Return a non-negative indent width; ``True`` means two spaces.

    Examples
    --------
    >>> coerce_json_indent(True), coerce_json_indent(False), coerce_json_indent(4)
    (2, 0, 4)
    >>> coerce_json_indent(-1)
    Traceback (most recent call last):
    ...
    ValueError: json indent must be a non-negative integer: -1
    """

    if value is None or value is False:
        return 0
    if value is True:
        return 2
    try:
        indent = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"json indent must be a non-negative integer: {value!r}") from exc
    if indent < 0:
        raise ValueError(f"json indent must be a non-negative integer: {value!r}")
    return indent


class RecordFormatter:
    """Render Bunyan records for one destination stream.

    Parameters
    ----------
    color:
        Wrap fragments in ANSI SGR sequences.
    output_mode:
        An :class:`OutputMode`, mode name, or mode id. Unrecognised values
        select ``long``.
    json_indent:
        Indent width for ``json`` mode (``True`` means 2).

    Examples
    --------
    >>> formatter = RecordFormatter(output_mode='simple')
    >>> formatter.format({'v': 0, 'level': 30, 'name': 'app', 'hostname': 'h',
    ...                   'pid': 1, 'time': '2024-01-02T03:04:05', 'msg': 'hi'})
    ['INFO - hi\\n']
    """

    def __init__(self, *, color: bool = False, output_mode: Any = OutputMode.LONG, json_indent: Any = 0) -> None:
        self._stylizer = Stylizer(color=color)
        self._mode = OutputMode.resolve(output_mode)
        self._json_indent = coerce_json_indent(json_indent)
        self._timestamps = TimestampRenderer(self._stylizer)

    @property
    def color(self) -> bool:
        return self._stylizer.color

    @property
    def output_mode(self) -> OutputMode:
        return self._mode

    @property
    def json_indent(self) -> int:
        return self._json_indent

    @property
    def timestamps(self) -> TimestampRenderer:
        return self._timestamps

    def format(self, record: Mapping[str, Any], raw: str | None = None) -> list[str]:
        """Return the text chunks for ``record``, each ending with ``\\n``.

        ``raw`` is the original input text, used verbatim when an invalid
        record is passed through; it defaults to the record's compact JSON.
        The caller's mapping is never modified.
        """

        mode = self._mode
        if mode is OutputMode.LONG or mode is OutputMode.SHORT:
            return self._format_long(record, raw, short=mode is OutputMode.SHORT)
        elif mode is OutputMode.INSPECT:
            return [inspect_value(record, colorize=self.color) + "\n"]
        elif mode is OutputMode.BUNYAN:
            return [compact_json(record) + "\n"]
        elif mode is OutputMode.JSON:
            return [self._dump_json(record) + "\n"]
        elif mode is OutputMode.SIMPLE:
            return [self._format_simple(record, raw)]
        else:  # exhaustiveness guard
            raise UnknownOutputModeError(f"unknown output mode: {mode!r}")

    def transform(self, items: Iterable[Any]) -> Iterator[str]:
        """Yield chunks record by record.

        ``items`` holds :class:`~bunyan_view.adapters.reader.InputLine`
        values (as produced by ``read_records``), ``(record, raw)`` pairs, or
        bare records. An item without a record is a non-record line and yields
        its raw text unchanged.

        Examples
        --------
        >>> from bunyan_view.adapters.reader import read_records
        >>> formatter = RecordFormatter(output_mode="simple")
        >>> lines = ['{"v": 0, "level": 30, "name": "a", "hostname": "h", "pid": 1, "time": "2024-01-02T03:04:05", "msg": "hi"}', "noise"]
        >>> list(formatter.transform(read_records(lines)))
        ['INFO - hi\\n', 'noise\\n']
        """

        for item in items:
            if isinstance(item, InputLine):
                record, raw = item.record, item.raw
            elif isinstance(item, tuple):
                record, raw = item
            else:
                record, raw = item, None
            if record is None:
                yield f"{raw}\n"
                continue
            yield from self.format(record, raw)

    def write(self, record: Mapping[str, Any], output: OutputPort, raw: str | None = None) -> None:
        """Render ``record`` and hand every chunk to ``output``, then flush."""

        for chunk in self.format(record, raw):
            output.write(chunk)
        output.flush()

    def _dump_json(self, record: Mapping[str, Any]) -> str:
        if not self._json_indent:
            return compact_json(record)
        return json.dumps(record, indent=self._json_indent, ensure_ascii=False, default=str)

    def _format_simple(self, record: Mapping[str, Any], raw: str | None) -> str:
        if not is_valid_record(record):
            logger.debug("record is missing required fields; passing through")
            return _raw_text(record, raw) + "\n"
        return f"{level_upper_name(record['level'])} - {record['msg']}\n"

    def _format_long(self, record: Mapping[str, Any], raw: str | None, *, short: bool) -> list[str]:
        #    [time] [l] name[/comp][/pid] on hostname (src): msg (extras...)
        #             details (multi-line msg, req, res, err.stack, leftover)
        if not is_valid_record(record):
            logger.debug("record is missing required fields; passing through")
            ts, _ = parse_timestamp(record.get("time"))
            return self._timestamps.render(ts, _raw_text(record, raw))

        work = working_copy(record)
        stylizer = self._stylizer

        ts = take_timestamp(work)
        name = take_name(work, stylizer, short=short)
        level = take_level(work, stylizer)
        src = take_src(work, stylizer)
        hostname = take_hostname(work, stylizer)

        body = take_req_id(work)
        msg, msg_fragment = take_msg(work)
        body.extend(msg_fragment)
        for step in BODY_STEPS:
            body.extend(step(work))
        body.extend(take_leftover(work, colorize=self.color))

        if short:
            header = f"{level}{name}: {msg}{_extras_text(msg, body)}"
        else:
            header = f"{level}{name} on {hostname}{src}: {msg}{_extras_text(msg, body)}"
        return self._timestamps.render(ts, header + "\n" + "\n".join(body.details))


def _extras_text(msg: str, body: Fragment) -> str:
    if not body.extras:
        return ""
    extras = "(" + ", ".join(body.extras) + ")"
    return f" {extras}" if msg else extras


def _raw_text(record: Mapping[str, Any], raw: str | None) -> str:
    return raw if raw is not None else compact_json(record)


__all__ = ["RecordFormatter", "coerce_json_indent"]
