"""Adapters: ANSI styling, structure dumps, and stream I/O."""

from __future__ import annotations

from .pretty import indent_block, inspect_value
from .reader import InputLine, decode_line, iter_paths, read_records
from .stream import StreamWriter
from .stylizer import Stylizer

__all__ = [
    "InputLine",
    "StreamWriter",
    "Stylizer",
    "decode_line",
    "indent_block",
    "inspect_value",
    "iter_paths",
    "read_records",
]
