"""Text-stream adapter implementing :class:`OutputPort`.

Purpose
-------
Write rendered chunks to stdout or any text stream. Callers flush after each
chunk or record so a downstream pager sees output as soon as it is complete.
"""

from __future__ import annotations

import logging
from typing import TextIO

from bunyan_view.application.ports.output import OutputPort

LOGGER = logging.getLogger(__name__)


class StreamWriter(OutputPort):
    """Forward chunks to ``stream`` until the reader goes away.

    A closed pipe (``head``, a quit pager) is the normal way for output to end,
    so :class:`BrokenPipeError` marks the writer closed instead of propagating.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> writer = StreamWriter(buffer)
    >>> writer.write('line\\n')
    >>> buffer.getvalue()
    'line\\n'
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, chunk: str) -> None:
        if self._closed:
            return
        try:
            self._stream.write(chunk)
        except BrokenPipeError:
            self._mark_closed()

    def flush(self) -> None:
        if self._closed:
            return
        try:
            self._stream.flush()
        except BrokenPipeError:
            self._mark_closed()

    def _mark_closed(self) -> None:
        LOGGER.debug("output stream closed by reader; dropping remaining output")
        self._closed = True


__all__ = ["StreamWriter"]
