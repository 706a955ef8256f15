"""Output port describing where rendered text goes.

Purpose
-------
Define the narrow boundary between the formatter and the destination text
stream (terminal, file, or pager pipe) so the core never touches I/O.

Contents
--------
* :class:`OutputPort` - runtime-checkable protocol with ``write`` and ``flush``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputPort(Protocol):
    """Accept rendered chunks, each ending with a line break.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.chunks = []
    ...     def write(self, chunk):
    ...         self.chunks.append(chunk)
    ...     def flush(self):
    ...         pass
    >>> isinstance(Recorder(), OutputPort)
    True
    """

    def write(self, chunk: str) -> None:
        """Deliver ``chunk`` to the destination."""

    def flush(self) -> None:
        """Signal that the current record is complete."""


__all__ = ["OutputPort"]
