"""Domain registries and record conventions used by the formatter."""

from __future__ import annotations

from .levels import LogLevel
from .modes import OutputMode, UnknownOutputModeError
from .records import REQUIRED_FIELDS, is_valid_record, parse_timestamp

__all__ = [
    "LogLevel",
    "OutputMode",
    "REQUIRED_FIELDS",
    "UnknownOutputModeError",
    "is_valid_record",
    "parse_timestamp",
]
