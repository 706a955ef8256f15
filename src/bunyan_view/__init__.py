"""Public package surface for rendering Bunyan records.

Exports the formatter and its settings so host applications can plug the
renderer into their own pipelines (``RecordFormatter(...).transform(records)``)
without going through the CLI.
"""

from __future__ import annotations

from .adapters import StreamWriter, read_records
from .application.use_cases import RecordFormatter, TimestampRenderer
from .config import FormatterSettings, load_settings
from .domain import LogLevel, OutputMode, UnknownOutputModeError, is_valid_record


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = [
    "FormatterSettings",
    "LogLevel",
    "OutputMode",
    "RecordFormatter",
    "StreamWriter",
    "TimestampRenderer",
    "UnknownOutputModeError",
    "is_valid_record",
    "load_settings",
    "read_records",
    "summary_info",
]
