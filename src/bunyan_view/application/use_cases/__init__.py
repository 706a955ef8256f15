"""Application use cases: record formatting and its timestamp column."""

from __future__ import annotations

from .format_record import RecordFormatter, coerce_json_indent
from .timestamps import TimestampRenderer

__all__ = ["RecordFormatter", "TimestampRenderer", "coerce_json_indent"]
