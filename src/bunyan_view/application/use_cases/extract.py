"""Ordered, destructive extraction steps for long and short rendering.

Purpose
-------
Each step takes the formatter's owned working record, removes the keys it
claims, and returns what it contributes: a header token or a
:class:`Fragment` of extras and details. Running the steps in order is the
whole rendering protocol; a key consumed by one step is never seen by a later
one.

Contents
--------
* :class:`Fragment` - extras (inline annotations) and details (blocks below
  the header).
* Header steps: :func:`take_timestamp`, :func:`take_name`,
  :func:`take_level`, :func:`take_src`, :func:`take_hostname`,
  :func:`take_msg`.
* Body steps: :func:`take_req_id`, :func:`take_req`,
  :func:`take_client_req`, :func:`take_responses`, :func:`take_err`,
  :func:`take_leftover`.

Alignment Notes
---------------
Nested keys nobody claims are re-surfaced on the record as ``<prefix>.<key>``
so they show up in the leftover dump. That can overwrite a literal top-level
key with the same dotted name; the collision is accepted.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from typing import Any

from bunyan_view.adapters.pretty import indent_block, inspect_value
from bunyan_view.adapters.stylizer import Stylizer
from bunyan_view.domain.levels import level_color, level_prefix
from bunyan_view.domain.records import compact_json, parse_timestamp

logger = logging.getLogger(__name__)

Record = MutableMapping[str, Any]


@dataclass(slots=True)
class Fragment:
    """Contribution of one body step."""

    extras: list[str] = field(default_factory=list)
    details: list[str] = field(default_factory=list)

    def extend(self, other: "Fragment") -> None:
        self.extras.extend(other.extras)
        self.details.extend(other.details)


def text_of(value: Any) -> str:
    """Render a scalar the way it reads in an HTTP message.

    Examples
    --------
    >>> text_of(True), text_of(None), text_of(['a', 1]), text_of({'k': 1})
    ('true', '', 'a,1', '{"k":1}')
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(text_of(item) for item in value)
    if isinstance(value, Mapping):
        return compact_json(value)
    return str(value)


def body_text(body: Any) -> str:
    """Pretty-print structured bodies as JSON; pass text through."""

    if body is None or isinstance(body, (Mapping, list, tuple)):
        return json.dumps(body, indent=2, ensure_ascii=False, default=str)
    return text_of(body)


def header_lines(headers: Mapping[str, Any]) -> str:
    return "\n".join(f"{key}: {text_of(value)}" for key, value in headers.items())


def resurface(record: Record, prefix: str, remainder: Mapping[str, Any]) -> None:
    """Copy unclaimed nested keys onto ``record`` as ``<prefix>.<key>``."""

    for key, value in remainder.items():
        record[f"{prefix}.{key}"] = value


# ---------------------------------------------------------------------------
# Header steps


def take_timestamp(record: Record) -> datetime:
    """Parse and remove ``time``; drop ``v``. Unparseable times become now."""

    raw = record.pop("time", None)
    ts, parsed = parse_timestamp(raw)
    if not parsed:
        logger.debug("unparseable record time %r; using now", raw)
    record.pop("v", None)
    return ts


def take_name(record: Record, stylizer: Stylizer, *, short: bool) -> str:
    """Build ``name[/component][/pid]`` coloured by level; consume the parts.

    ``level`` is read but left for :func:`take_level`.
    """

    name = stylizer.stylize(text_of(record.pop("name", None)), level_color(record.get("level")))
    component = record.pop("component", None)
    if component:
        name += f"/{text_of(component)}"
    pid = record.pop("pid", None)
    if not short:
        name += f"/{text_of(pid)}"
    return name


def take_level(record: Record, stylizer: Stylizer) -> str:
    """Build the ``[x] `` bracket and consume ``level``.

    Examples
    --------
    >>> take_level({'level': 40}, Stylizer(color=False))
    '[w] '
    >>> take_level({'level': 45}, Stylizer(color=False))
    '[45] '
    """

    level = record.pop("level", None)
    return stylizer.stylize(f"[{level_prefix(level)}] ", level_color(level))


def take_src(record: Record, stylizer: Stylizer) -> str:
    """Build `` (file:line[ in func])`` when ``src.file`` is set; always consume ``src``."""

    src = record.pop("src", None)
    if not isinstance(src, Mapping) or not src.get("file"):
        return ""
    location = f"{text_of(src.get('file'))}:{text_of(src.get('line'))}"
    if src.get("func"):
        location += f" in {text_of(src.get('func'))}"
    return stylizer.stylize(f" ({location})", "green")


def take_hostname(record: Record, stylizer: Stylizer) -> str:
    hostname = text_of(record.pop("hostname", None))
    return stylizer.stylize(hostname or "<unknown>", "GREEN")


def take_msg(record: Record) -> tuple[str, Fragment]:
    """Return the inline message; multi-line messages move to details.

    Examples
    --------
    >>> take_msg({'msg': 'one line'})
    ('one line', Fragment(extras=[], details=[]))
    >>> take_msg({'msg': 'two\\nlines'})
    ('', Fragment(extras=[], details=['two\\nlines']))
    """

    msg = text_of(record.pop("msg", None))
    if "\n" in msg:
        return "", Fragment(details=[msg])
    return msg, Fragment()


# ---------------------------------------------------------------------------
# Body steps


def take_req_id(record: Record) -> Fragment:
    req_id = record.pop("req_id", None)
    if req_id:
        return Fragment(extras=[f"req_id={text_of(req_id)}"])
    return Fragment()


def _take_body(message: MutableMapping[str, Any]) -> str:
    body = message.get("body")
    if not body:
        return ""
    del message["body"]
    return "\n\n" + body_text(body)


def take_req(record: Record) -> Fragment:
    """Render a server request (``req``) as an HTTP message block."""

    req = record.get("req")
    if not isinstance(req, MutableMapping):
        return Fragment()
    del record["req"]

    headers = req.pop("headers", None)
    if not headers:
        header_text = ""
    elif isinstance(headers, Mapping):
        header_text = "\n" + header_lines(headers)
    else:
        header_text = "\n" + text_of(headers)

    method = text_of(req.pop("method", None))
    url = text_of(req.pop("url", None))
    version = text_of(req.pop("httpVersion", None)) or "1.1"
    block = f"{method} {url} HTTP/{version}{header_text}"
    block += _take_body(req)

    trailers = req.pop("trailers", None)
    if isinstance(trailers, Mapping) and trailers:
        block += "\n" + header_lines(trailers)

    resurface(record, "req", req)
    return Fragment(details=[block])


def take_client_req(record: Record) -> Fragment:
    """Render an outgoing request (``client_req``), synthesising ``Host:``."""

    client_req = record.get("client_req")
    if not isinstance(client_req, MutableMapping):
        return Fragment()
    del record["client_req"]

    headers = client_req.pop("headers", None)
    address = client_req.pop("address", None)
    port = client_req.pop("port", None)
    host_line = ""
    if address:
        host_line = f"Host: {text_of(address)}"
        if port:
            host_line += f":{text_of(port)}"
        host_line += "\n"

    if isinstance(headers, Mapping):
        header_text = header_lines(headers)
    else:
        header_text = text_of(headers)

    method = text_of(client_req.pop("method", None))
    url = text_of(client_req.pop("url", None))
    version = text_of(client_req.pop("httpVersion", None)) or "1.1"
    block = f"{method} {url} HTTP/{version}\n{host_line}{header_text}"
    block += _take_body(client_req)

    resurface(record, "client_req", client_req)
    return Fragment(details=[block])


def _reason_phrase(code: Any) -> str:
    try:
        return HTTPStatus(int(code)).phrase
    except (TypeError, ValueError):
        return ""


def render_response(record: Record, res: MutableMapping[str, Any]) -> Fragment:
    """Render one response mapping; shared by ``res`` and ``client_res``."""

    block = ""
    if "statusCode" in res:
        code = res.pop("statusCode")
        block += f"HTTP/1.1 {text_of(code)} {_reason_phrase(code)}\n"

    headers: Any = None
    if "header" in res:
        headers = res.pop("header")
    elif "headers" in res:
        headers = res.pop("headers")
    if not headers:
        pass
    elif isinstance(headers, Mapping):
        block += header_lines(headers)
    else:
        block += text_of(headers).rstrip()

    if "body" in res:
        block += "\n\n" + body_text(res.pop("body"))
    else:
        block = block.rstrip()

    trailer = res.pop("trailer", None)
    if trailer:
        block += "\n" + text_of(trailer)

    resurface(record, "res", res)
    return Fragment(details=[block] if block else [])


def take_responses(record: Record) -> Fragment:
    """Render ``res`` then ``client_res`` and consume both."""

    fragment = Fragment()
    for key in ("res", "client_res"):
        res = record.get(key)
        if isinstance(res, MutableMapping):
            del record[key]
            fragment.extend(render_response(record, res))
    return fragment


def take_err(record: Record) -> Fragment:
    """Move ``err.stack`` into details and flatten what else ``err`` carried."""

    err = record.get("err")
    if not isinstance(err, MutableMapping) or not err.get("stack"):
        return Fragment()
    stack = text_of(err.pop("stack"))
    err.pop("message", None)
    err.pop("name", None)
    del record["err"]
    resurface(record, "err", err)
    return Fragment(details=[stack])


def take_leftover(record: Record, *, colorize: bool) -> Fragment:
    """Dump whatever no earlier step claimed, indented under the header."""

    if not record:
        return Fragment()
    leftover = dict(record)
    record.clear()
    return Fragment(details=[indent_block(inspect_value(leftover, colorize=colorize))])


BODY_STEPS = (take_req, take_client_req, take_responses, take_err)
# Order matters: later steps only see keys earlier steps left behind.


__all__ = [
    "BODY_STEPS",
    "Fragment",
    "body_text",
    "header_lines",
    "render_response",
    "resurface",
    "take_client_req",
    "take_err",
    "take_hostname",
    "take_leftover",
    "take_level",
    "take_msg",
    "take_name",
    "take_req",
    "take_req_id",
    "take_responses",
    "take_src",
    "take_timestamp",
    "text_of",
]
